"""Single-slot-per-path snapshot store for one-step undo."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from obsidian_diff_edit.diff.types import Result
from obsidian_diff_edit.errors import ErrorKind
from obsidian_diff_edit.paths import normalize_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RollbackEntry:
    """Content of a file immediately before a mutating operation."""

    content: str
    timestamp: datetime
    reason: str

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation (without the content)."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "reason": self.reason,
        }


class RollbackStore:
    """Holds at most one snapshot per normalized path.

    Owned by the server process and passed into every mutating operation.
    A new save overwrites the previous snapshot for that path, and a restore
    consumes it, so only the state before the most recent mutation can be
    recovered. There is no locking: concurrent saves on one path are
    last-write-wins.
    """

    def __init__(self, normalizer: Callable[[str], str] = normalize_path) -> None:
        self._normalize = normalizer
        self._entries: dict[str, RollbackEntry] = {}

    def save(self, path: str, content: str, reason: str) -> None:
        """Record ``content`` as the undo state for ``path``, replacing any previous one."""
        key = self._normalize(path)
        self._entries[key] = RollbackEntry(
            content=content,
            timestamp=datetime.now(timezone.utc),
            reason=reason,
        )
        logger.debug("Saved rollback for '%s' (%s)", key, reason)

    def peek(self, path: str) -> Optional[RollbackEntry]:
        """Return the snapshot for ``path`` without consuming it."""
        return self._entries.get(self._normalize(path))

    def restore(
        self,
        path: str,
        writer: Optional[Callable[[str], None]] = None,
    ) -> Result[RollbackEntry]:
        """Consume the snapshot for ``path``.

        Args:
            path: File path; normalized before lookup.
            writer: Optional callback that persists the snapshot content. It runs
                before the entry is deleted; if it raises, the entry is kept and
                the exception propagates.

        Returns:
            A :class:`Result` with the consumed entry, or ``NoRollbackAvailable``.
        """
        key = self._normalize(path)
        entry = self._entries.get(key)
        if entry is None:
            return Result.failure(
                ErrorKind.NO_ROLLBACK_AVAILABLE,
                f"No rollback available for '{key}'.",
            )

        if writer is not None:
            writer(entry.content)

        del self._entries[key]
        logger.debug("Consumed rollback for '%s' (%s)", key, entry.reason)
        return Result.success(entry)
