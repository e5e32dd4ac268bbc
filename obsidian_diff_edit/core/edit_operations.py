"""Core business logic for diff-based file edits and rollback.

Each mutating operation follows the same sequence: read the current content,
compute the new content with the pure diff engine, save a rollback snapshot
of the content just read, then write. Nothing is saved or written when the
engine reports an error.
"""

from __future__ import annotations

import logging
from typing import Any

from obsidian_diff_edit.constants import (
    ANCHOR_MATCH_THRESHOLD,
    DEFAULT_CONTEXT_LINES,
    DEFAULT_MAX_PATCH_STEPS,
    ROLLBACK_SUFFIX,
)
from obsidian_diff_edit.core.vault_operations import (
    ensure_vault_ready,
    read_vault_file,
    resolve_file_path,
    write_vault_file,
)
from obsidian_diff_edit.data_models import VaultMetadata
from obsidian_diff_edit.diff import apply_diff, apply_snippet
from obsidian_diff_edit.diff.types import DiffEditOutcome, Result
from obsidian_diff_edit.errors import DiffEditError
from obsidian_diff_edit.paths import normalize_path
from obsidian_diff_edit.rollback import RollbackStore

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _unwrap(result: Result[Any]) -> Any:
    """Return the value of a successful result or raise its error."""
    if not result.ok:
        raise DiffEditError(result.error)
    return result.value


def _commit_edit(
    vault: VaultMetadata,
    path: str,
    original: str,
    outcome: DiffEditOutcome,
    store: RollbackStore,
    reason: str,
) -> dict[str, Any]:
    """Save the pre-edit snapshot, persist the new content and build the payload."""
    normalized = normalize_path(path)
    target_path = resolve_file_path(vault, normalized)
    store.save(normalized, original, reason)
    write_vault_file(target_path, outcome.updated_content)
    return {
        "vault": vault.name,
        "path": normalized,
        "diff": outcome.applied_diff_text,
        "status": "edited",
    }


# ==============================================================================
# READ OPERATIONS
# ==============================================================================


def read_file(vault: VaultMetadata, path: str) -> dict[str, Any]:
    """Retrieve the content of a vault file.

    Args:
        vault: Vault metadata.
        path: Vault-relative file path including the extension.

    Returns:
        A dictionary containing the vault name, normalized path and raw content.

    Raises:
        DiffEditError: ``FileNotFound`` or ``PathIsFolder``.
    """
    _, content = read_vault_file(vault, path)
    return {
        "vault": vault.name,
        "path": normalize_path(path),
        "content": content,
    }


# ==============================================================================
# EDIT OPERATIONS
# ==============================================================================


def diff_edit_file(
    vault: VaultMetadata,
    path: str,
    diff: str,
    store: RollbackStore,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> dict[str, Any]:
    """Apply a unified diff to a vault file.

    Args:
        vault: Vault metadata.
        path: Vault-relative file path; must match the diff's header paths.
        diff: Single-file unified diff, optionally fenced.
        store: Rollback store receiving the pre-edit snapshot.
        context_lines: Context used in the returned confirmation diff.

    Returns:
        ``{"vault", "path", "diff", "status": "edited"}`` where ``diff`` is the
        net change actually applied.

    Raises:
        DiffEditError: For any parse or apply failure (the file is untouched),
            a missing file, a folder path, or an I/O error.
    """
    _, original = read_vault_file(vault, path)
    outcome = _unwrap(apply_diff(path, diff, original, context_lines))
    payload = _commit_edit(vault, path, original, outcome, store, "diff-edit")
    logger.info("Applied diff to '%s' in vault '%s'", payload["path"], vault.name)
    return payload


def snippet_edit_file(
    vault: VaultMetadata,
    path: str,
    snippet: str,
    store: RollbackStore,
    max_patch_steps: int = DEFAULT_MAX_PATCH_STEPS,
    anchor_threshold: float = ANCHOR_MATCH_THRESHOLD,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> dict[str, Any]:
    """Rewrite the region of a vault file that ``snippet`` approximately matches.

    Args:
        vault: Vault metadata.
        path: Vault-relative file path.
        snippet: Replacement text, anchored by its first, middle and last characters.
        store: Rollback store receiving the pre-edit snapshot.
        max_patch_steps: Largest accepted number of separate changes.
        anchor_threshold: Minimum anchor similarity.
        context_lines: Context used in the returned confirmation diff.

    Returns:
        ``{"vault", "path", "diff", "status": "edited"}``.

    Raises:
        DiffEditError: ``AnchorNotFound``, ``SnippetTooDifferent`` or a file error.
    """
    _, original = read_vault_file(vault, path)
    outcome = _unwrap(
        apply_snippet(
            path,
            snippet,
            original,
            max_patch_steps=max_patch_steps,
            anchor_threshold=anchor_threshold,
            context_lines=context_lines,
        )
    )
    payload = _commit_edit(vault, path, original, outcome, store, "snippet-edit")
    logger.info("Applied snippet edit to '%s' in vault '%s'", payload["path"], vault.name)
    return payload


def upsert_file(
    vault: VaultMetadata,
    path: str,
    content: str,
    store: RollbackStore,
) -> dict[str, Any]:
    """Create a file, or append ``content`` to it when it already exists.

    Appending inserts a newline first unless the file already ends with one,
    and saves a rollback snapshot of the previous content.

    Args:
        vault: Vault metadata.
        path: Vault-relative file path; missing parent folders are created.
        content: Text for the new file, or text to append.
        store: Rollback store receiving the pre-append snapshot.

    Returns:
        ``{"vault", "path", "status"}`` with status ``"created"`` or ``"appended"``.

    Raises:
        DiffEditError: ``PathIsFolder`` or an I/O error.
    """
    ensure_vault_ready(vault)
    normalized = normalize_path(path)
    target_path = resolve_file_path(vault, normalized)

    if not target_path.exists():
        write_vault_file(target_path, content)
        logger.info("Created file '%s' in vault '%s'", normalized, vault.name)
        return {"vault": vault.name, "path": normalized, "status": "created"}

    _, existing = read_vault_file(vault, normalized)
    separator = "" if existing.endswith("\n") else "\n"
    store.save(normalized, existing, "upsert-file")
    write_vault_file(target_path, existing + separator + content)
    logger.info("Appended to file '%s' in vault '%s'", normalized, vault.name)
    return {"vault": vault.name, "path": normalized, "status": "appended"}


# ==============================================================================
# ROLLBACK OPERATIONS
# ==============================================================================


def rollback_edit_file(
    vault: VaultMetadata,
    path: str,
    store: RollbackStore,
) -> dict[str, Any]:
    """Restore a markdown file to its state before the last mutating operation.

    The snapshot is consumed only after it has been written back, so a failed
    write leaves it available for another attempt.

    Args:
        vault: Vault metadata.
        path: Vault-relative path of a ``.md`` file.
        store: Rollback store holding the snapshot.

    Returns:
        ``{"vault", "path", "reason", "timestamp", "status": "rolled_back"}``.

    Raises:
        ValueError: If ``path`` is not a markdown file.
        DiffEditError: ``NoRollbackAvailable`` or an I/O error.
    """
    ensure_vault_ready(vault)
    normalized = normalize_path(path)
    if not normalized.lower().endswith(ROLLBACK_SUFFIX):
        raise ValueError(f"Only {ROLLBACK_SUFFIX} files can be rolled back (got '{normalized}').")

    target_path = resolve_file_path(vault, normalized)
    entry = _unwrap(
        store.restore(normalized, writer=lambda content: write_vault_file(target_path, content))
    )
    logger.info(
        "Rolled back '%s' in vault '%s' to state saved by %s at %s",
        normalized,
        vault.name,
        entry.reason,
        entry.timestamp.isoformat(),
    )
    return {
        "vault": vault.name,
        "path": normalized,
        **entry.as_payload(),
        "status": "rolled_back",
    }
