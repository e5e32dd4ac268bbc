"""Entry point composing parse, locate, apply and emit."""

from __future__ import annotations

from obsidian_diff_edit.constants import DEFAULT_CONTEXT_LINES
from obsidian_diff_edit.diff.applier import apply_document
from obsidian_diff_edit.diff.emitter import emit_unified_diff
from obsidian_diff_edit.diff.parser import parse_unified_diff
from obsidian_diff_edit.diff.types import DiffEditOutcome, Result


def apply_diff(
    path: str,
    diff_text: str,
    original_content: str,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> Result[DiffEditOutcome]:
    """Apply a single-file unified diff to ``original_content``.

    Pure function: no I/O. The caller persists ``updated_content``.

    Args:
        path: Vault-relative path the diff must target.
        diff_text: Diff text, optionally wrapped in a code fence.
        original_content: Current file content.
        context_lines: Context used when rendering the confirmation diff.

    Returns:
        A :class:`Result` with the new content and the rendered net change, or
        the first parse/apply error.

    Example:
        >>> outcome = apply_diff("f", "--- f\\n+++ f\\n@@ @@\\n A\\n-B\\n+X\\n C\\n", "A\\nB\\nC\\n").value
        >>> outcome.updated_content
        'A\\nX\\nC\\n'
    """
    parsed = parse_unified_diff(diff_text, path)
    if not parsed.ok:
        return Result(error=parsed.error)

    applied = apply_document(original_content, parsed.value)
    if not applied.ok:
        return Result(error=applied.error)

    emitted = emit_unified_diff(parsed.value.path, original_content, applied.value, context_lines)
    if not emitted.ok:
        return Result(error=emitted.error)

    return Result.success(
        DiffEditOutcome(updated_content=applied.value, applied_diff_text=emitted.value)
    )
