"""Base Pydantic models for MCP tool input validation.

This module defines the base model shared by every file-oriented tool.
Other input models inherit from it.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from obsidian_diff_edit.paths import normalize_path


class BaseFileInput(BaseModel):
    """Base model for file operations with common validation.

    Provides standard validation for vault-relative file paths and vault names.
    """

    path: str = Field(
        min_length=1,
        description=(
            "Vault-relative file path including the extension. "
            "Examples: 'Daily Notes/2025-10-27.md', 'Projects/Plan.md'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["Daily Notes/2025-10-27.md", "Projects/Plan.md", "README.md"]
    )

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use the default vault from vaults.yaml)."
        )
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate and normalize the file path.

        Enforces:
        - Non-empty path
        - Relative path only (no leading '/')
        - No '.' or '..' path segments

        Args:
            v: The path to validate

        Returns:
            The normalized path (single forward slashes, no trailing slash)

        Raises:
            ValueError: If the path is empty, absolute, or contains traversal segments
        """
        cleaned = v.strip()

        if not cleaned:
            raise ValueError(
                "File path cannot be empty. "
                "Provide a vault-relative path like 'Daily Notes/2025-10-27.md'."
            )

        if cleaned.startswith(("/", "\\")):
            raise ValueError(
                "File path must be relative to the vault. "
                "Do not start with '/'. "
                f"Invalid path: '{cleaned}'"
            )

        normalized = normalize_path(cleaned)
        if any(part in {".", ".."} for part in normalized.split("/")):
            raise ValueError(
                "File path cannot contain '.' or '..' segments. "
                f"Invalid path: '{cleaned}'"
            )

        return normalized

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Reject empty vault names; strip surrounding whitespace."""
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the default vault, "
                "or provide a vault name from vaults.yaml."
            )

        return v.strip() if v else None
