"""Obsidian Diff-Edit MCP Server

Targeted edits to vault files via unified diffs, with one-step rollback.
"""

from obsidian_diff_edit.config import get_vault_configuration, load_vault_configuration
from obsidian_diff_edit.data_models import EditSettings, VaultConfiguration, VaultMetadata
from obsidian_diff_edit.diff import apply_diff, apply_snippet
from obsidian_diff_edit.errors import DiffEditError, DiffError, ErrorKind
from obsidian_diff_edit.rollback import RollbackEntry, RollbackStore
from obsidian_diff_edit.server import mcp, run_server

# Import tools to register them with the MCP server
from obsidian_diff_edit import tools  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "get_vault_configuration",
    "load_vault_configuration",
    "EditSettings",
    "VaultConfiguration",
    "VaultMetadata",
    "apply_diff",
    "apply_snippet",
    "DiffEditError",
    "DiffError",
    "ErrorKind",
    "RollbackEntry",
    "RollbackStore",
    "mcp",
    "run_server",
]
