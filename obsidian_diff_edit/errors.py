"""Error taxonomy shared by the diff engine and the edit operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Failure categories surfaced to MCP clients."""

    MALFORMED_DIFF_HEADER = "MalformedDiffHeader"
    PATH_MISMATCH = "PathMismatch"
    MULTI_FILE_DIFF = "MultiFileDiff"
    HUNK_PARSE_ERROR = "HunkParseError"
    HUNK_APPLY_ERROR = "HunkApplyError"
    FILE_NOT_FOUND = "FileNotFound"
    PATH_IS_FOLDER = "PathIsFolder"
    NO_ROLLBACK_AVAILABLE = "NoRollbackAvailable"
    ANCHOR_NOT_FOUND = "AnchorNotFound"
    SNIPPET_TOO_DIFFERENT = "SnippetTooDifferent"
    OPERATION_FAILED = "OperationFailed"


@dataclass(frozen=True)
class DiffError:
    """A structured failure: the kind plus a human readable message."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class DiffEditError(Exception):
    """Raised at the tool boundary when an operation returns a failed result.

    FastMCP converts the exception into an error response, so the message is
    what the client sees.
    """

    def __init__(self, error: DiffError) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind
