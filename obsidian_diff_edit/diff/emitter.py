"""Render the net change between two buffers as a unified diff.

The emitted diff describes what actually changed (original vs. final), not a
replay of the caller's input diff. It is written so that feeding it back
through :func:`parse_unified_diff` and :func:`apply_document` against the
original reproduces the final buffer exactly.
"""

from __future__ import annotations

import re
from difflib import SequenceMatcher

from obsidian_diff_edit.constants import DEFAULT_CONTEXT_LINES
from obsidian_diff_edit.diff.applier import apply_document
from obsidian_diff_edit.diff.parser import parse_unified_diff
from obsidian_diff_edit.diff.types import LineKind, Result
from obsidian_diff_edit.errors import ErrorKind
from obsidian_diff_edit.paths import normalize_path

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")

Opcode = tuple[str, int, int, int, int]


def split_lines_keepends(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping terminators (unlike ``str.splitlines``)."""
    return _LINE_RE.findall(text)


def _line_text(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _format_range(start: int, stop: int) -> str:
    """Convert a slice range to the ``start,length`` form used in hunk headers."""
    beginning = start + 1
    length = stop - start
    if length == 1:
        return f"{beginning}"
    if not length:
        beginning -= 1
    return f"{beginning},{length}"


def _render_hunk(a: list[str], b: list[str], group: list[Opcode]) -> list[str]:
    i1, i2 = group[0][1], group[-1][2]
    j1, j2 = group[0][3], group[-1][4]
    rendered = [f"@@ -{_format_range(i1, i2)} +{_format_range(j1, j2)} @@"]

    for tag, a1, a2, b1, b2 in group:
        if tag == "equal":
            rendered.extend(LineKind.CONTEXT.value + _line_text(line) for line in a[a1:a2])
            continue
        removed = [LineKind.REMOVED.value + _line_text(line) for line in a[a1:a2]]
        added = [LineKind.ADDED.value + _line_text(line) for line in b[b1:b2]]
        # "--- x" directly followed by "+++ y" would read as a second file header
        if removed and added and removed[-1].startswith("--- ") and added[0].startswith("+++ "):
            rendered.extend(added + removed)
        else:
            rendered.extend(removed + added)

    # Blocks are joined with "\n", so a terminated last line needs a trailing
    # empty line on whichever side(s) carry the terminator.
    search_terminated = i2 > i1 and a[i2 - 1].endswith("\n")
    replace_terminated = j2 > j1 and b[j2 - 1].endswith("\n")
    if search_terminated and replace_terminated:
        rendered.append(LineKind.CONTEXT.value)
    elif search_terminated:
        rendered.append(LineKind.REMOVED.value)
    elif replace_terminated:
        rendered.append(LineKind.ADDED.value)
    return rendered


def _render(path: str, a: list[str], b: list[str], context_lines: int) -> str:
    rendered = [f"--- {path}", f"+++ {path}"]
    matcher = SequenceMatcher(None, a, b, autojunk=False)
    for group in matcher.get_grouped_opcodes(context_lines):
        rendered.extend(_render_hunk(a, b, group))
    return "\n".join(rendered) + "\n"


def _replays(path: str, diff_text: str, original: str, final: str) -> bool:
    parsed = parse_unified_diff(diff_text, path)
    if not parsed.ok:
        return False
    applied = apply_document(original, parsed.value)
    return applied.ok and applied.value == final


def emit_unified_diff(
    path: str,
    original: str,
    final: str,
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> Result[str]:
    """Render the line-based change from ``original`` to ``final``.

    Context is widened (doubling, up to the whole file) whenever the rendered
    hunks would not relocate unambiguously, so the output always round-trips.

    Args:
        path: Vault-relative path used in both header lines.
        original: Content before the edit.
        final: Content after the edit.
        context_lines: Initial number of unchanged lines around each change.

    Returns:
        A :class:`Result` holding the diff text. Identical inputs yield just the
        two header lines. ``OperationFailed`` is returned only when no rendering
        replays exactly.
    """
    path = normalize_path(path)
    if original == final:
        return Result.success(f"--- {path}\n+++ {path}\n")

    a = split_lines_keepends(original)
    b = split_lines_keepends(final)
    widest = len(a) + len(b)
    context = max(context_lines, 0)

    while True:
        diff_text = _render(path, a, b, context)
        if _replays(path, diff_text, original, final):
            return Result.success(diff_text)
        if context >= widest:
            break
        context = min(max(context * 2, 1), widest)

    return Result.failure(
        ErrorKind.OPERATION_FAILED,
        f"Could not render a diff for '{path}' that reproduces the edit.",
    )
