"""Pydantic input models for file edit operations.

This module defines input models for:
- Reading a file
- Applying a unified diff
- Applying a fuzzy snippet edit
- Creating or appending to a file
- Rolling back the last edit
"""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator

from obsidian_diff_edit.paths import normalize_path

from .base import BaseFileInput


class ReadFileInput(BaseFileInput):
    """Input model for read_obsidian_file tool.

    Examples:
        >>> ReadFileInput(path="Daily Notes/2025-10-27.md")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Daily Notes/2025-10-27.md", "vault": None}
            ]
        }


class DiffEditInput(BaseFileInput):
    """Input model for diff_edit_obsidian_file tool.

    The diff must describe exactly one file whose header paths match ``path``.

    Examples:
        >>> DiffEditInput(path="todo.md", diff="--- todo.md\\n+++ todo.md\\n@@ ... @@\\n-[ ] a\\n+[x] a\\n")
    """

    diff: str = Field(
        min_length=1,
        description=(
            "Unified diff for this one file: '--- <path>' and '+++ <path>' headers, "
            "then one or more '@@ ... @@' hunks with ' ' context, '-' removed and "
            "'+' added lines. Line numbers are ignored; hunks are located by their "
            "context and removed lines, which must match the file exactly, in order."
        )
    )

    @field_validator('diff')
    @classmethod
    def validate_diff_not_blank(cls, v: str) -> str:
        """Reject whitespace-only diffs."""
        if not v.strip():
            raise ValueError(
                "Diff cannot be empty. "
                "Provide '--- <path>', '+++ <path>' headers followed by '@@' hunks."
            )
        return v

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "path": "Projects/Plan.md",
                    "diff": (
                        "--- Projects/Plan.md\n+++ Projects/Plan.md\n@@ ... @@\n"
                        " ## Tasks\n-- [ ] Draft outline\n+- [x] Draft outline\n"
                    ),
                    "vault": None
                }
            ]
        }


class SnippetEditInput(BaseFileInput):
    """Input model for snippet_edit_obsidian_file tool.

    Examples:
        >>> SnippetEditInput(path="todo.md", snippet="## Tasks\\n- [x] Draft outline\\n- [ ] Review")
    """

    snippet: str = Field(
        min_length=1,
        description=(
            "New text for one region of the file. Its first, middle and last "
            "32 characters are used to find the region, so keep unchanged text "
            "at both edges."
        )
    )

    max_patch_steps: Optional[int] = Field(
        None,
        ge=1,
        description=(
            "Largest number of separate changes accepted between the matched "
            "region and the snippet (omit to use the configured default)."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "path": "Projects/Plan.md",
                    "snippet": "## Tasks\n- [x] Draft outline\n- [ ] Review draft\n",
                    "vault": None
                }
            ]
        }


class UpsertFileInput(BaseFileInput):
    """Input model for upsert_obsidian_file tool.

    Examples:
        >>> UpsertFileInput(path="Inbox.md", content="- call the bank")
    """

    content: str = Field(
        description=(
            "Content for a new file, or text appended to an existing file "
            "(a newline separator is inserted when needed)."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Inbox.md", "content": "- call the bank", "vault": None}
            ]
        }


class RollbackEditInput(BaseFileInput):
    """Input model for rollback_edit_obsidian_file tool.

    Examples:
        >>> RollbackEditInput(path="Projects/Plan.md")
    """

    @field_validator('path')
    @classmethod
    def validate_markdown(cls, v: str) -> str:
        """Only markdown notes keep rollback snapshots."""
        if not normalize_path(v).lower().endswith(".md"):
            raise ValueError(
                f"Only .md files can be rolled back. Invalid path: '{v}'"
            )
        return v

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Plan.md", "vault": None}
            ]
        }
