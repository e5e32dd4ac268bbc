"""Fuzzy snippet edits located by head/mid/tail anchors.

A separate, explicitly selected strategy: the caller sends the new text of a
region (the snippet) instead of a diff. Short anchors taken from the snippet
are matched approximately against the file to find the region it replaces.
Ties are broken in anchor order (head, mid, tail), then by earliest position.
"""

from __future__ import annotations

import logging
from difflib import SequenceMatcher
from typing import Optional

from obsidian_diff_edit.constants import (
    ANCHOR_LENGTH,
    ANCHOR_MATCH_THRESHOLD,
    DEFAULT_CONTEXT_LINES,
    DEFAULT_MAX_PATCH_STEPS,
)
from obsidian_diff_edit.diff.emitter import emit_unified_diff
from obsidian_diff_edit.diff.types import AnchorCandidate, DiffEditOutcome, Result
from obsidian_diff_edit.errors import ErrorKind

logger = logging.getLogger(__name__)


def derive_anchors(snippet: str, length: int = ANCHOR_LENGTH) -> list[AnchorCandidate]:
    """Take the first, middle and last ``length`` characters of ``snippet``.

    Candidates with identical text and offset (short snippets) are kept once.
    """
    if not snippet:
        return []

    size = min(length, len(snippet))
    mid_offset = (len(snippet) - size) // 2
    tail_offset = len(snippet) - size
    candidates = [
        AnchorCandidate(snippet[:size], 0, "head"),
        AnchorCandidate(snippet[mid_offset : mid_offset + size], mid_offset, "mid"),
        AnchorCandidate(snippet[tail_offset:], tail_offset, "tail"),
    ]

    unique: list[AnchorCandidate] = []
    seen: set[tuple[str, int]] = set()
    for candidate in candidates:
        key = (candidate.anchor_text, candidate.offset_within_snippet)
        if key not in seen:
            seen.add(key)
            unique.append(candidate)
    return unique


def find_anchor(
    content: str,
    anchor: str,
    start: int = 0,
    stop: Optional[int] = None,
    threshold: float = ANCHOR_MATCH_THRESHOLD,
) -> Optional[tuple[int, float]]:
    """Locate ``anchor`` in ``content[start:stop]``, exactly or approximately.

    Returns:
        ``(position, similarity)`` for the exact match, or for the earliest
        window with the best ratio at or above ``threshold``; ``None`` otherwise.
    """
    stop = len(content) if stop is None else min(stop, len(content))
    exact = content.find(anchor, start, stop)
    if exact != -1:
        return exact, 1.0

    width = len(anchor)
    matcher = SequenceMatcher(None, autojunk=False)
    matcher.set_seq2(anchor)

    best_pos = -1
    best_ratio = 0.0
    for pos in range(start, max(start, stop - width) + 1):
        matcher.set_seq1(content[pos : min(pos + width, stop)])
        if matcher.real_quick_ratio() <= best_ratio or matcher.quick_ratio() <= best_ratio:
            continue
        ratio = matcher.ratio()
        if ratio > best_ratio:
            best_ratio = ratio
            best_pos = pos

    if best_pos != -1 and best_ratio >= threshold:
        return best_pos, best_ratio
    return None


def count_patch_steps(region: str, snippet: str) -> int:
    """Number of separate insert/delete/replace runs turning region into snippet."""
    matcher = SequenceMatcher(None, region, snippet, autojunk=False)
    return sum(1 for tag, *_ in matcher.get_opcodes() if tag != "equal")


def apply_snippet(
    path: str,
    snippet: str,
    original_content: str,
    max_patch_steps: int = DEFAULT_MAX_PATCH_STEPS,
    anchor_threshold: float = ANCHOR_MATCH_THRESHOLD,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> Result[DiffEditOutcome]:
    """Replace the region of ``original_content`` that ``snippet`` rewrites.

    Args:
        path: Vault-relative path, used for the rendered diff.
        snippet: New text for the region, including enough unchanged text at
            its edges for the anchors to match.
        original_content: Current file content.
        max_patch_steps: Largest number of separate changes accepted between the
            located region and the snippet.
        anchor_threshold: Minimum similarity for an approximate anchor match.
        context_lines: Context used when rendering the confirmation diff.

    Returns:
        A :class:`Result` with the new content and rendered diff, or
        ``AnchorNotFound`` / ``SnippetTooDifferent``.
    """
    if "\r\n" in original_content and original_content.count("\n") == original_content.count("\r\n"):
        # CRLF-only file: the snippet follows its line endings
        snippet = snippet.replace("\r\n", "\n").replace("\n", "\r\n")

    anchors = derive_anchors(snippet)
    if not anchors or not original_content:
        return Result.failure(
            ErrorKind.ANCHOR_NOT_FOUND,
            "Snippet edits need a non-empty snippet and non-empty file content.",
        )

    chosen: Optional[AnchorCandidate] = None
    position = -1
    for candidate in anchors:
        match = find_anchor(original_content, candidate.anchor_text, threshold=anchor_threshold)
        if match is not None:
            chosen = candidate
            position, similarity = match
            logger.debug(
                "Snippet %s anchor matched at offset %d (similarity %.2f)",
                candidate.label,
                position,
                similarity,
            )
            break

    if chosen is None:
        return Result.failure(
            ErrorKind.ANCHOR_NOT_FOUND,
            "None of the snippet's head, middle or tail anchors were found in the file.",
        )

    start = max(0, position - chosen.offset_within_snippet)
    end = start + len(snippet)
    tail = anchors[-1]
    if chosen is tail and tail.label == "tail":
        end = position + len(tail.anchor_text)
    elif tail.label == "tail":
        window_stop = start + 2 * len(snippet) + len(tail.anchor_text)
        tail_match = find_anchor(
            original_content,
            tail.anchor_text,
            start=start,
            stop=window_stop,
            threshold=anchor_threshold,
        )
        if tail_match is not None:
            end = tail_match[0] + len(tail.anchor_text)
    end = max(start, min(end, len(original_content)))

    region = original_content[start:end]
    steps = count_patch_steps(region, snippet)
    if steps > max_patch_steps:
        return Result.failure(
            ErrorKind.SNIPPET_TOO_DIFFERENT,
            f"The snippet differs from the matched region by {steps} changes "
            f"(limit {max_patch_steps}). Send a unified diff instead.",
        )

    updated = original_content[:start] + snippet + original_content[end:]
    emitted = emit_unified_diff(path, original_content, updated, context_lines)
    if not emitted.ok:
        return Result(error=emitted.error)
    return Result.success(DiffEditOutcome(updated_content=updated, applied_diff_text=emitted.value))
