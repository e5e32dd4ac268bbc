"""Vault path canonicalization."""

from __future__ import annotations

import re
import unicodedata

_SEPARATORS = re.compile(r"[\\/]+")


def normalize_path(path: str) -> str:
    """Canonicalize a vault-relative path the way Obsidian does.

    Backslashes and repeated separators collapse to a single ``/``, leading and
    trailing separators are removed, non-breaking spaces become regular spaces
    and the result is NFC normalized. The function is idempotent.

    Examples:
        >>> normalize_path("//Daily Notes\\\\2025-10-27.md/")
        'Daily Notes/2025-10-27.md'
        >>> normalize_path("")
        '/'
    """
    cleaned = _SEPARATORS.sub("/", path.strip())
    cleaned = cleaned.strip("/")
    cleaned = cleaned.replace("\u00a0", " ").replace("\u202f", " ")
    if not cleaned:
        return "/"
    return unicodedata.normalize("NFC", cleaned)
