"""Tests for rendering the net change as a unified diff."""

import pytest

from obsidian_diff_edit.diff import apply_document, emit_unified_diff, parse_unified_diff
from obsidian_diff_edit.diff.emitter import split_lines_keepends


def _replay(path: str, original: str, final: str, context_lines: int = 3) -> str:
    """Emit a diff, then apply it back to ``original`` and return the result."""
    emitted = emit_unified_diff(path, original, final, context_lines)
    assert emitted.ok, emitted.error
    parsed = parse_unified_diff(emitted.value, path)
    assert parsed.ok, parsed.error
    applied = apply_document(original, parsed.value)
    assert applied.ok, applied.error
    return applied.value


def test_identical_content_yields_headers_only() -> None:
    result = emit_unified_diff("notes/a.md", "same\n", "same\n")
    assert result.value == "--- notes/a.md\n+++ notes/a.md\n"


def test_simple_change_rendering() -> None:
    result = emit_unified_diff("f", "A\nB\nC\n", "A\nX\nC\n")
    assert result.value == "--- f\n+++ f\n@@ -1,3 +1,3 @@\n A\n-B\n+X\n C\n \n"


def test_path_is_normalized_in_headers() -> None:
    result = emit_unified_diff("/notes//a.md", "a\n", "b\n")
    assert result.value.startswith("--- notes/a.md\n+++ notes/a.md\n")


def test_split_lines_keepends_only_splits_on_lf() -> None:
    assert split_lines_keepends("a\r\nb\rc\nd") == ["a\r\n", "b\rc\n", "d"]
    assert split_lines_keepends("") == []


@pytest.mark.parametrize(
    ("original", "final"),
    [
        ("a", "a\n"),
        ("a\n", "a"),
        ("", "hello\n"),
        ("x\ny\n", ""),
        ("first\n", "zero\nfirst\n"),
        ("first\n", "first\nlast\n"),
    ],
    ids=["add-final-newline", "drop-final-newline", "from-empty", "to-empty", "prepend", "append"],
)
def test_edge_changes_round_trip(original: str, final: str) -> None:
    assert _replay("f.md", original, final) == final


def test_repeated_lines_widen_context() -> None:
    original = "- [ ] task\n" * 20
    lines = original.splitlines(keepends=True)
    lines[14] = "- [x] task\n"
    final = "".join(lines)
    assert _replay("tasks.md", original, final) == final


def test_distant_changes_round_trip() -> None:
    original = "".join(f"line {n}\n" for n in range(50))
    final = original.replace("line 2\n", "line two\n").replace("line 45\n", "")
    emitted = emit_unified_diff("f.md", original, final).value
    assert emitted.count("\n@@ ") == 2
    assert _replay("f.md", original, final) == final


def test_zero_context_still_round_trips() -> None:
    assert _replay("f.md", "a\nb\nc\n", "a\nB\nc\n", context_lines=0) == "a\nB\nc\n"


def test_crlf_content_round_trips() -> None:
    original = "A\r\nB\r\nC\r\n"
    final = "A\r\nX\r\nC\r\n"
    assert _replay("f.md", original, final) == final


def test_mixed_line_endings_round_trip() -> None:
    original = "l1\nl2\r\nl3\nl4\n"
    final = "l1\nl2\r\nL3\nl4\n"
    assert _replay("f.md", original, final) == final


@pytest.mark.parametrize("path", ["a/notes.md", "b/todo.md"])
def test_folder_named_like_git_prefix_round_trips(path: str) -> None:
    emitted = emit_unified_diff(path, "x\n", "y\n")
    assert emitted.ok, emitted.error
    assert emitted.value.startswith(f"--- {path}\n+++ {path}\n")
    assert _replay(path, "x\n", "y\n") == "y\n"


def test_dashed_line_replaced_by_plus_line_is_not_a_header() -> None:
    original = "intro text line\n-- signature\nmore\n"
    final = "intro text line\n++ signature\nmore\n"
    emitted = emit_unified_diff("f.md", original, final).value
    assert emitted.index("+++ signature") < emitted.index("--- signature")
    assert _replay("f.md", original, final) == final
