"""Exact, order-preserving location of hunk search blocks.

Each hunk is searched for in the working buffer starting at a resume offset:
the end of the previous hunk's replacement. Content inserted by an earlier
hunk is therefore never matched by a later one, and hunks must appear in file
order.

Line text must match exactly; only the terminator between lines may be either
``\\n`` or ``\\r\\n``, so files with CRLF or mixed line endings are handled.
"""

from __future__ import annotations

import re

from obsidian_diff_edit.diff.types import Hunk, LineKind, LocatedHunk, Result
from obsidian_diff_edit.errors import ErrorKind

# Longest block excerpt quoted back in a HunkApplyError message
MAX_QUOTED_BLOCK = 400

_TERMINATOR_RE = re.compile(r"\r?\n")


def _quote_block(block: str) -> str:
    if len(block) <= MAX_QUOTED_BLOCK:
        return block
    return block[:MAX_QUOTED_BLOCK] + "\n[...]"


def _block_pattern(search: str) -> re.Pattern[str]:
    """Literal lines of ``search`` joined by either line terminator."""
    return re.compile(r"\r?\n".join(re.escape(line) for line in search.split("\n")))


def _replacement(hunk: Hunk, terminators: list[str], fallback: str) -> str:
    """Join the hunk's replacement lines using the matched terminators.

    ``terminators[k]`` ends the k-th search line in the buffer. A context line
    keeps its own terminator; an added line takes the one of the search line
    before it.
    """
    texts: list[str] = []
    sources: list[int] = []
    position = 0
    for line in hunk.lines:
        if line.kind is LineKind.ADDED:
            texts.append(line.text)
            sources.append(max(position - 1, 0))
            continue
        if line.kind is LineKind.CONTEXT:
            texts.append(line.text)
            sources.append(position)
        position += 1

    if not texts:
        return ""

    parts: list[str] = []
    for text, source in zip(texts[:-1], sources[:-1]):
        parts.append(text)
        parts.append(terminators[source] if source < len(terminators) else fallback)
    parts.append(texts[-1])
    return "".join(parts)


def locate_hunk(working: str, hunk: Hunk, index: int, resume_offset: int) -> Result[LocatedHunk]:
    """Find ``hunk``'s search block in ``working`` at or after ``resume_offset``.

    The block's lines must occur contiguously and exactly; each ``\\n`` in the
    block matches ``\\n`` or ``\\r\\n`` in the buffer. Replacement lines are
    written with the terminators of the lines they stand in for.

    Args:
        working: Current (partially patched) buffer.
        hunk: Hunk to locate.
        index: Zero-based position of the hunk in its document, for messages.
        resume_offset: Earliest offset the match may start at.

    Returns:
        A :class:`Result` with the :class:`LocatedHunk`, or ``HunkApplyError``
        naming the missing block.
    """
    search = hunk.search_block
    match = _block_pattern(search).search(working, resume_offset)

    if match is None:
        where = "in the file" if resume_offset == 0 else "after the previous hunk"
        return Result.failure(
            ErrorKind.HUNK_APPLY_ERROR,
            f"Hunk {index + 1} could not be applied: its context and removed lines "
            f"were not found {where}. Missing block:\n{_quote_block(search)}",
        )

    matched = match.group(0)
    terminators = _TERMINATOR_RE.findall(matched)
    following = _TERMINATOR_RE.match(working, match.end())
    if following is not None:
        fallback = following.group(0)
    elif terminators:
        fallback = terminators[-1]
    else:
        fallback = "\n"

    return Result.success(
        LocatedHunk(
            index=index,
            offset=match.start(),
            search=matched,
            replace=_replacement(hunk, terminators, fallback),
        )
    )
