"""Data models for vault metadata and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from obsidian_diff_edit.constants import (
    ANCHOR_MATCH_THRESHOLD,
    DEFAULT_CONTEXT_LINES,
    DEFAULT_MAX_PATCH_STEPS,
)


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str


@dataclass(frozen=True)
class EditSettings:
    """Tunables for diff rendering and snippet matching."""

    context_lines: int = DEFAULT_CONTEXT_LINES
    snippet_max_patch_steps: int = DEFAULT_MAX_PATCH_STEPS
    anchor_match_threshold: float = ANCHOR_MATCH_THRESHOLD


@dataclass
class VaultConfiguration:
    """Holds vault metadata, edit settings and default resolution helpers.

    Loaded lazily from vaults.yaml (see :func:`get_vault_configuration`).
    """

    default_vault: str
    vaults: dict[str, VaultMetadata]
    settings: EditSettings = field(default_factory=EditSettings)

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Args:
            name: The name of the vault to retrieve.

        Returns:
            VaultMetadata for the requested vault.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            known = ", ".join(sorted(self.vaults)) or "none"
            raise ValueError(f"Unknown vault '{name}' (configured: {known})") from exc
