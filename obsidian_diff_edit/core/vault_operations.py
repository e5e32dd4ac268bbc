"""Core vault access: readiness checks, sandboxed paths and file I/O."""

from __future__ import annotations

from pathlib import Path

from obsidian_diff_edit.data_models import VaultMetadata
from obsidian_diff_edit.errors import DiffEditError, DiffError, ErrorKind
from obsidian_diff_edit.paths import normalize_path


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Args:
        vault: Metadata describing the vault to use.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def resolve_file_path(vault: VaultMetadata, path: str) -> Path:
    """Resolve a vault-relative file path to an absolute path inside the vault.

    The path is normalized first (see :func:`normalize_path`). Input validation
    (empty, traversal segments, absolute paths) happens in the Pydantic models;
    this function only enforces the filesystem-level sandbox.

    Args:
        vault: Vault metadata.
        path: Vault-relative path including the extension.

    Returns:
        The absolute :class:`Path` inside ``vault``.

    Raises:
        ValueError: If the resolved path escapes the vault root.
    """
    relative = normalize_path(path)
    candidate = (vault.path / relative).resolve(strict=False)
    vault_root = vault.path.resolve(strict=False)

    if candidate == vault_root or not candidate.is_relative_to(vault_root):
        raise ValueError(f"Path '{relative}' escapes the configured vault.")

    return candidate


def read_vault_file(vault: VaultMetadata, path: str) -> tuple[Path, str]:
    """Read a file, reporting missing files and folders as structured errors.

    Returns:
        A tuple of ``(absolute_path, content)``.

    Raises:
        DiffEditError: ``FileNotFound``, ``PathIsFolder`` or ``OperationFailed``.
    """
    ensure_vault_ready(vault)
    target_path = resolve_file_path(vault, path)
    display = normalize_path(path)

    if target_path.is_dir():
        raise DiffEditError(DiffError(ErrorKind.PATH_IS_FOLDER, f"Provided path is a folder: {display}"))
    if not target_path.is_file():
        raise DiffEditError(
            DiffError(
                ErrorKind.FILE_NOT_FOUND,
                f"File not found: {display} (vault '{vault.name}')",
            )
        )

    try:
        with target_path.open("r", encoding="utf-8", newline="") as handle:
            return target_path, handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DiffEditError(
            DiffError(ErrorKind.OPERATION_FAILED, f"Error reading {display}: {exc}")
        ) from exc


def write_vault_file(target_path: Path, content: str) -> None:
    """Write ``content`` to an already resolved vault path.

    Raises:
        DiffEditError: ``OperationFailed`` carrying the underlying message.
    """
    try:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_text(content, encoding="utf-8", newline="")
    except OSError as exc:
        raise DiffEditError(
            DiffError(ErrorKind.OPERATION_FAILED, f"Error writing {target_path.name}: {exc}")
        ) from exc
