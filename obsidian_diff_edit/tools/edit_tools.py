"""File edit MCP tools.

This module provides MCP tool wrappers for:
- Reading a file
- Applying a unified diff (exact, order-preserving hunk matching)
- Applying a snippet edit (fuzzy head/mid/tail anchors)
- Creating or appending to a file
- Rolling back the last edit to a markdown file

All tools delegate to core operations in obsidian_diff_edit.core.edit_operations.
Failures raise; FastMCP reports them to the client as error results.
"""
from __future__ import annotations

from typing import Any

from obsidian_diff_edit.config import get_vault_configuration
from obsidian_diff_edit.server import mcp
from obsidian_diff_edit.session import get_rollback_store, resolve_vault
from obsidian_diff_edit.models import (
    ReadFileInput,
    DiffEditInput,
    SnippetEditInput,
    UpsertFileInput,
    RollbackEditInput,
)
from obsidian_diff_edit.core.edit_operations import (
    read_file,
    diff_edit_file,
    snippet_edit_file,
    upsert_file,
    rollback_edit_file,
)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================

@mcp.tool()
async def read_obsidian_file(input: ReadFileInput) -> dict[str, Any]:
    """Read the complete content of a vault file.

    Use before editing to see the exact text your diff context must match.

    Args:
        input (ReadFileInput): Validated input containing:
            - path (str): Vault-relative path including extension
                Examples: "Daily Notes/2025-10-27.md", "Projects/Plan.md"
            - vault (str, optional): Vault name (omit to use default vault)

    Returns:
        {"vault": str, "path": str, "content": str}

    Error Handling:
        - FileNotFound → check the path and extension
        - PathIsFolder → the path names a folder, not a file
    """
    metadata = resolve_vault(input.vault)
    return read_file(metadata, input.path)


# ==============================================================================
# EDIT OPERATIONS
# ==============================================================================

# Applies a unified diff; the response carries the net change actually made.
@mcp.tool()
async def diff_edit_obsidian_file(input: DiffEditInput) -> dict[str, Any]:
    """Apply a unified diff to one file without resending its whole content.

    Hunks are located by their context and removed lines ('@@' line numbers
    are ignored). Each hunk must match the file exactly and hunks must be in
    file order. If any hunk fails, nothing is written.

    Args:
        input (DiffEditInput): Validated input containing:
            - path (str): Vault-relative file path (must equal the diff headers)
            - diff (str): Unified diff, e.g.
                --- Projects/Plan.md
                +++ Projects/Plan.md
                @@ ... @@
                 ## Tasks
                -- [ ] Draft outline
                +- [x] Draft outline
            - vault (str, optional): Vault name (omit to use default vault)

    Returns:
        {"vault": str, "path": str, "diff": str, "status": "edited"}
        where "diff" is the change actually applied; compare it to your intent.

    Examples:
        - Use when: Changing a few lines in a long note
        - Don't use: Rewriting most of the file → Use upsert on a new file
        - Undo: rollback_edit_obsidian_file() restores the pre-edit content

    Error Handling:
        - MalformedDiffHeader → first two lines must be '--- path' and '+++ path'
        - PathMismatch → header paths must both equal the requested path
        - MultiFileDiff → send one diff per file
        - HunkParseError → every hunk must start with '@@ ... @@'
        - HunkApplyError → re-read the file and regenerate the diff
    """
    metadata = resolve_vault(input.vault)
    settings = get_vault_configuration().settings
    return diff_edit_file(
        metadata,
        input.path,
        input.diff,
        get_rollback_store(),
        context_lines=settings.context_lines,
    )


# Fuzzy alternative to diff edits: the snippet's anchors locate the region.
@mcp.tool()
async def snippet_edit_obsidian_file(input: SnippetEditInput) -> dict[str, Any]:
    """Replace the region of a file that a snippet approximately rewrites.

    The snippet's first, middle and last 32 characters are matched against the
    file (tried in that order) to find the region, which is then replaced by
    the snippet. Rejected when the region and snippet differ too much.

    Args:
        input (SnippetEditInput): Validated input containing:
            - path (str): Vault-relative file path
            - snippet (str): New text for the region, with unchanged edges
            - max_patch_steps (int, optional): Change limit (default from config)
            - vault (str, optional): Vault name (omit to use default vault)

    Returns:
        {"vault": str, "path": str, "diff": str, "status": "edited"}

    Error Handling:
        - AnchorNotFound → include more unchanged text at the snippet edges
        - SnippetTooDifferent → use diff_edit_obsidian_file() instead
    """
    metadata = resolve_vault(input.vault)
    settings = get_vault_configuration().settings
    return snippet_edit_file(
        metadata,
        input.path,
        input.snippet,
        get_rollback_store(),
        max_patch_steps=input.max_patch_steps or settings.snippet_max_patch_steps,
        anchor_threshold=settings.anchor_match_threshold,
        context_lines=settings.context_lines,
    )


@mcp.tool()
async def upsert_obsidian_file(input: UpsertFileInput) -> dict[str, Any]:
    """Create a file, or append to it if it already exists.

    Missing parent folders are created. Appends are separated by a newline and
    can be undone with rollback_edit_obsidian_file().

    Args:
        input (UpsertFileInput): Validated input containing:
            - path (str): Vault-relative file path
            - content (str): New file content, or text to append
            - vault (str, optional): Vault name (omit to use default vault)

    Returns:
        {"vault": str, "path": str, "status": "created" | "appended"}
    """
    metadata = resolve_vault(input.vault)
    return upsert_file(metadata, input.path, input.content, get_rollback_store())


# ==============================================================================
# ROLLBACK OPERATIONS
# ==============================================================================

@mcp.tool()
async def rollback_edit_obsidian_file(input: RollbackEditInput) -> dict[str, Any]:
    """Undo the last edit to a markdown file.

    Restores the content saved just before the most recent diff edit, snippet
    edit or append. Only one level is kept per file: a second rollback without
    an edit in between fails.

    Args:
        input (RollbackEditInput): Validated input containing:
            - path (str): Vault-relative path of a .md file
            - vault (str, optional): Vault name (omit to use default vault)

    Returns:
        {"vault": str, "path": str, "reason": str, "timestamp": str, "status": "rolled_back"}

    Error Handling:
        - NoRollbackAvailable → the file has not been edited since the last rollback
    """
    metadata = resolve_vault(input.vault)
    return rollback_edit_file(metadata, input.path, get_rollback_store())
