"""Parser for single-file unified diffs.

This module turns diff text into a :class:`UnifiedDiffDocument`. The grammar
is deliberately small::

    --- path/to/note.md
    +++ path/to/note.md
    @@ ... @@
     unchanged context line
    -removed line
    +added line

Line numbers in ``@@`` headers are informational only; hunks are located by
content (see :mod:`obsidian_diff_edit.diff.locator`).
"""

from __future__ import annotations

import re
from typing import Optional

from obsidian_diff_edit.diff.types import (
    DiffLine,
    Hunk,
    LineKind,
    Result,
    UnifiedDiffDocument,
)
from obsidian_diff_edit.errors import ErrorKind
from obsidian_diff_edit.paths import normalize_path

FENCE = "```"

# File headers, with an optional tab-separated timestamp
OLD_HEADER_RE = re.compile(r"^--- (.+?)(?:\t.*)?$")
NEW_HEADER_RE = re.compile(r"^\+\+\+ (.+?)(?:\t.*)?$")

# Hunk header: @@ -1,3 +1,4 @@ optional section text, or the literal @@ ... @@
HUNK_HEADER_RE = re.compile(r"^@@.*?@@(?P<section>.*)$")

_PREFIXES = {kind.value: kind for kind in LineKind}


def _strip_path_prefix(path: str) -> str:
    """Strip a single a/ or b/ prefix from path if present."""
    if path.startswith("a/") or path.startswith("b/"):
        return path[2:]
    return path


def _header_path(raw: str, target: str) -> str:
    """Normalize a header path, stripping ``a/``/``b/`` unless it already names the target."""
    path = normalize_path(raw)
    if path == target:
        return path
    return normalize_path(_strip_path_prefix(raw))


def _split_lines(text: str) -> list[str]:
    """Split on LF after CRLF normalization; a final newline ends the last line."""
    lines = text.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _strip_fence(lines: list[str]) -> list[str]:
    """Drop a leading ``` line and a trailing ``` line when present."""
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    if start < len(lines) and lines[start].lstrip().startswith(FENCE):
        start += 1
    lines = lines[start:]

    end = len(lines)
    while end > 0 and not lines[end - 1].strip():
        end -= 1
    if end > 0 and lines[end - 1].rstrip() == FENCE:
        lines = lines[: end - 1]

    # Blank lines between an opening fence and the header
    while lines and not lines[0].strip():
        lines = lines[1:]
    return lines


def _is_file_header(lines: list[str], idx: int, after_hunk: bool) -> bool:
    """Detect a second file's ``--- path`` line.

    Before any hunk it must be directly followed by ``+++ path``. After a hunk
    it may also be followed (past blank lines) by an ``@@`` header or the end
    of the diff. ``----`` (a removed ``---`` line) never matches.
    """
    if OLD_HEADER_RE.match(lines[idx]) is None:
        return False
    following = idx + 1
    if following < len(lines) and NEW_HEADER_RE.match(lines[following]) is not None:
        return True
    if not after_hunk:
        return False
    while following < len(lines) and not lines[following].strip():
        following += 1
    return following == len(lines) or HUNK_HEADER_RE.match(lines[following]) is not None


def _classify(line: str) -> Optional[DiffLine]:
    """Classify a non-empty hunk body line; unknown prefixes yield ``None``."""
    kind = _PREFIXES.get(line[0])
    if kind is None:
        return None
    return DiffLine(kind, line[1:])


def parse_unified_diff(text: str, target_path: str) -> Result[UnifiedDiffDocument]:
    """Parse diff text that claims to edit ``target_path``.

    Handles:
    - An optional surrounding Markdown code fence
    - CRLF line endings in the diff text
    - ``a/`` and ``b/`` prefixes on the header paths (kept when the path as
      written already names the target, e.g. a vault folder called ``a``)
    - Blank lines before the first hunk
    - Bare empty lines inside a hunk (treated as empty context lines; a run of
      them at the end of a hunk collapses into a single trailing newline)

    Args:
        text: Raw diff text, possibly fenced.
        target_path: Vault-relative path the caller intends to edit.

    Returns:
        A successful :class:`Result` with the parsed document, or a failed one
        with kind ``MalformedDiffHeader``, ``PathMismatch``, ``MultiFileDiff``
        or ``HunkParseError``.

    Example:
        >>> result = parse_unified_diff("--- f.md\\n+++ f.md\\n@@ @@\\n a\\n-b\\n+c\\n", "f.md")
        >>> result.value.hunks[0].search_block
        'a\\nb'
    """
    lines = _strip_fence(_split_lines(text))

    if len(lines) < 2:
        return Result.failure(
            ErrorKind.MALFORMED_DIFF_HEADER,
            "Diff must start with '--- <path>' and '+++ <path>' header lines.",
        )

    old_match = OLD_HEADER_RE.match(lines[0])
    if old_match is None:
        return Result.failure(
            ErrorKind.MALFORMED_DIFF_HEADER,
            f"First line must be '--- <path>', found: {lines[0]!r}",
        )
    new_match = NEW_HEADER_RE.match(lines[1])
    if new_match is None:
        return Result.failure(
            ErrorKind.MALFORMED_DIFF_HEADER,
            f"Second line must be '+++ <path>', found: {lines[1]!r}",
        )

    target = normalize_path(target_path)
    old_path = _header_path(old_match.group(1).strip(), target)
    new_path = _header_path(new_match.group(1).strip(), target)
    if old_path != new_path:
        return Result.failure(
            ErrorKind.PATH_MISMATCH,
            f"Header paths differ: '{old_path}' vs '{new_path}'. "
            "A diff may only edit one file in place.",
        )

    if new_path != target:
        return Result.failure(
            ErrorKind.PATH_MISMATCH,
            f"Diff targets '{new_path}' but the requested file is '{target}'.",
        )

    hunks: list[Hunk] = []
    current: Optional[Hunk] = None
    pending_blank = 0

    for idx in range(2, len(lines)):
        line = lines[idx]

        if _is_file_header(lines, idx, after_hunk=current is not None):
            return Result.failure(
                ErrorKind.MULTI_FILE_DIFF,
                f"Second file header found on line {idx + 1}; "
                "a diff may only describe changes to one file.",
            )

        header = HUNK_HEADER_RE.match(line)
        if header is not None:
            if current is not None and pending_blank:
                current.lines.append(DiffLine(LineKind.CONTEXT, ""))
            pending_blank = 0
            current = Hunk(section=header.group("section").strip())
            hunks.append(current)
            continue

        if current is None:
            if not line.strip():
                continue
            return Result.failure(
                ErrorKind.HUNK_PARSE_ERROR,
                f"Expected a hunk header ('@@ ... @@') on line {idx + 1}, found: {line!r}",
            )

        if line == "":
            pending_blank += 1
            continue

        parsed = _classify(line)
        if parsed is None:
            continue
        for _ in range(pending_blank):
            current.lines.append(DiffLine(LineKind.CONTEXT, ""))
        pending_blank = 0
        current.lines.append(parsed)

    if current is not None and pending_blank:
        current.lines.append(DiffLine(LineKind.CONTEXT, ""))

    return Result.success(UnifiedDiffDocument(old_path=old_path, new_path=new_path, hunks=hunks))
