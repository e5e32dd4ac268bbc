"""MCP tool definitions for Obsidian file edits.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from obsidian_diff_edit.tools import edit_tools

__all__ = [
    "edit_tools",
]
