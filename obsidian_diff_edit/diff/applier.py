"""Apply located hunks to file content.

The applier is pure: it takes the original content and a parsed document and
returns the patched buffer. If any hunk fails to locate, the whole operation
fails and no partially patched buffer is returned.
"""

from __future__ import annotations

from obsidian_diff_edit.diff.locator import locate_hunk
from obsidian_diff_edit.diff.types import LocatedHunk, Result, UnifiedDiffDocument


def splice(working: str, located: LocatedHunk) -> str:
    """Replace the located search block with its replacement."""
    return working[: located.offset] + located.replace + working[located.end :]


def apply_document(original: str, document: UnifiedDiffDocument) -> Result[str]:
    """Apply every hunk of ``document`` to ``original`` in document order.

    Hunks are applied against the progressively updated buffer. Each search
    resumes at the end of the previous replacement.

    A single hunk with an empty search block against empty content is a file
    creation: its replace block becomes the whole content.

    Args:
        original: Current file content.
        document: Parsed diff.

    Returns:
        A :class:`Result` with the new content, or the first ``HunkApplyError``.

    Example:
        >>> from obsidian_diff_edit.diff.parser import parse_unified_diff
        >>> doc = parse_unified_diff("--- f\\n+++ f\\n@@ @@\\n A\\n-B\\n+X\\n C\\n", "f").value
        >>> apply_document("A\\nB\\nC\\n", doc).value
        'A\\nX\\nC\\n'
    """
    hunks = document.hunks
    if not original and len(hunks) == 1 and hunks[0].search_block == "":
        return Result.success(hunks[0].replace_block)

    working = original
    resume_offset = 0
    for index, hunk in enumerate(hunks):
        located = locate_hunk(working, hunk, index, resume_offset)
        if not located.ok:
            return Result(error=located.error)
        working = splice(working, located.value)
        resume_offset = located.value.offset + len(located.value.replace)

    return Result.success(working)
