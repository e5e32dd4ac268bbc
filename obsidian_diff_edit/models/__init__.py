"""Pydantic input models for MCP tool validation.

Each model represents the input schema for one tool, with field-level
validation and descriptive error messages that MCP clients see before any
file is touched.

Architecture:
- base: BaseFileInput for path and vault validation
- edit_models: Input models for read, diff edit, snippet edit, upsert and rollback

Usage:
    from obsidian_diff_edit.models import DiffEditInput, RollbackEditInput
"""

from .base import BaseFileInput
from .edit_models import (
    ReadFileInput,
    DiffEditInput,
    SnippetEditInput,
    UpsertFileInput,
    RollbackEditInput,
)

__all__ = [
    # Base model
    "BaseFileInput",
    # Edit models
    "ReadFileInput",
    "DiffEditInput",
    "SnippetEditInput",
    "UpsertFileInput",
    "RollbackEditInput",
]
