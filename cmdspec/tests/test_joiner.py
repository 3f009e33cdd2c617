from __future__ import annotations
import pytest

from cmdspec.grammar.joiner import join_lines


def test_drops_comments_and_blank_lines():
    raw = ["# comment", "", "   ", "  # indented comment", "state INITIAL:", "  'exit' -> call quit()"]
    out = list(join_lines(raw))
    assert [ll.text for ll in out] == ["state INITIAL:", "  'exit' -> call quit()"]
    assert [ll.line for ll in out] == [5, 6]


def test_continuation_is_appended_without_separator():
    raw = ["state INITIAL:", "  'mode'", "      -> MODE", "  end ->"]
    out = list(join_lines(raw))
    assert [ll.text for ll in out] == ["state INITIAL:", "  'mode'      -> MODE", "  end ->"]
    # the joined line keeps the number of its first physical line
    assert out[1].line == 2


def test_continuation_skips_interleaved_comments():
    raw = ["state A:", "  x = string", "  # explain", "  -> call f($x)"]
    out = list(join_lines(raw))
    assert out[-1].text == "  x = string  -> call f($x)"


def test_continuation_without_predecessor_is_fatal():
    with pytest.raises(SyntaxError) as ei:
        list(join_lines(["# header", "   -> INITIAL"]))
    assert "line 2" in str(ei.value)
    assert ei.value.lineno == 2


def test_is_lazy():
    seen = []

    def source():
        for line in ["state A:", "  'a' ->", "  'b' ->"]:
            seen.append(line)
            yield line

    it = join_lines(source())
    first = next(it)
    assert first.text == "state A:"
    # the pending line is only released once the next one is read
    assert len(seen) == 2
