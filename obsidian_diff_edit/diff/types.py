"""Types for the structured representation of a single-file unified diff.

The engine never raises for an expected failure. Every stage returns a
:class:`Result` holding either a value or a :class:`DiffError`, so the
orchestration layer can branch on ``result.error.kind``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

from obsidian_diff_edit.errors import DiffError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or an error, never both."""

    value: Optional[T] = None
    error: Optional[DiffError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=DiffError(kind, message))


class LineKind(Enum):
    """Classification of a hunk body line by its first character."""

    CONTEXT = " "
    ADDED = "+"
    REMOVED = "-"


@dataclass(frozen=True)
class DiffLine:
    kind: LineKind
    text: str


@dataclass
class Hunk:
    """A contiguous diff unit describing one edit location.

    Attributes:
        lines: Body lines in document order.
        section: Free text after the closing ``@@`` marker (informational).
    """

    lines: list[DiffLine] = field(default_factory=list)
    section: str = ""

    @property
    def search_block(self) -> str:
        """Context and removed lines joined in order: the text to find."""
        return "\n".join(
            line.text for line in self.lines if line.kind is not LineKind.ADDED
        )

    @property
    def replace_block(self) -> str:
        """Context and added lines joined in order: the replacement text."""
        return "\n".join(
            line.text for line in self.lines if line.kind is not LineKind.REMOVED
        )

    @property
    def is_noop(self) -> bool:
        """True when the hunk carries only context lines."""
        return all(line.kind is LineKind.CONTEXT for line in self.lines)


@dataclass
class UnifiedDiffDocument:
    """A parsed diff describing edits to exactly one file.

    ``old_path`` and ``new_path`` are stored after ``a/``/``b/`` stripping and
    normalization, so they are always equal for a successfully parsed document.
    """

    old_path: str
    new_path: str
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def path(self) -> str:
        return self.new_path


@dataclass(frozen=True)
class LocatedHunk:
    """Where a hunk's search block sits in the working buffer.

    ``search`` and ``replace`` are the block texts actually used, which differ
    from the hunk's blocks only in line-ending convention.
    """

    index: int
    offset: int
    search: str
    replace: str

    @property
    def end(self) -> int:
        return self.offset + len(self.search)


@dataclass(frozen=True)
class AnchorCandidate:
    """A short substring of a snippet used to relocate it approximately."""

    anchor_text: str
    offset_within_snippet: int
    label: str


@dataclass(frozen=True)
class DiffEditOutcome:
    """New file content plus the unified diff of the net change."""

    updated_content: str
    applied_diff_text: str
