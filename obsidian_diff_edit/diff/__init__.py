"""Diff engine: parse, locate, apply and render single-file edits.

All functions here are pure and synchronous; they never touch the vault.

Main components:
- Types: Hunk, UnifiedDiffDocument, Result - structured representation
- Parser: parse_unified_diff() - diff text to a document
- Locator/Applier: apply_document() - exact, order-preserving replacement
- Emitter: emit_unified_diff() - render the net change
- Snippet: apply_snippet() - fuzzy head/mid/tail anchor edits

Example usage:
    >>> from obsidian_diff_edit.diff import apply_diff
    >>> result = apply_diff("f.md", "--- f.md\\n+++ f.md\\n@@ @@\\n A\\n-B\\n+X\\n", "A\\nB\\n")
    >>> result.value.updated_content
    'A\\nX\\n'
"""

from obsidian_diff_edit.diff.applier import apply_document
from obsidian_diff_edit.diff.emitter import emit_unified_diff
from obsidian_diff_edit.diff.engine import apply_diff
from obsidian_diff_edit.diff.locator import locate_hunk
from obsidian_diff_edit.diff.parser import parse_unified_diff
from obsidian_diff_edit.diff.snippet import apply_snippet, derive_anchors
from obsidian_diff_edit.diff.types import (
    AnchorCandidate,
    DiffEditOutcome,
    DiffLine,
    Hunk,
    LineKind,
    LocatedHunk,
    Result,
    UnifiedDiffDocument,
)

__all__ = [
    # Types
    "AnchorCandidate",
    "DiffEditOutcome",
    "DiffLine",
    "Hunk",
    "LineKind",
    "LocatedHunk",
    "Result",
    "UnifiedDiffDocument",
    # Stages
    "parse_unified_diff",
    "locate_hunk",
    "apply_document",
    "emit_unified_diff",
    # Entry points
    "apply_diff",
    "apply_snippet",
    "derive_anchors",
]
