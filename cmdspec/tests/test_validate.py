from __future__ import annotations
import pytest

from cmdspec.grammar.parser import parse_spec
from cmdspec.grammar.validate import validate_grammar


def test_valid_grammar_has_no_warnings():
    g = parse_spec("state INITIAL:\n  'exit' -> call quit()\n  'x' -> INITIAL\n")
    assert validate_grammar(g) == []


def test_unbound_transition_is_fatal():
    g = parse_spec("state INITIAL:\n  'go' -> NOWHERE\n")
    with pytest.raises(SyntaxError) as ei:
        validate_grammar(g)
    assert "NOWHERE" in str(ei.value)
    assert "line 2" in str(ei.value)


def test_unbound_return_state_is_fatal():
    src = "state INITIAL:\n  workspace = STR -> call switch_workspace($workspace); WORKSPACE_STATE\n"
    with pytest.raises(SyntaxError, match="WORKSPACE_STATE"):
        validate_grammar(parse_spec(src))


def test_default_return_state_requires_initial():
    g = parse_spec("state MAIN:\n  'exit' -> call quit()\n")
    with pytest.raises(SyntaxError, match="INITIAL"):
        validate_grammar(g)


def test_reserved_sentinel_state_name():
    g = parse_spec("state INITIAL:\n  'a' ->\nstate __CALL:\n  'b' -> INITIAL\n")
    with pytest.raises(SyntaxError, match="reserved"):
        validate_grammar(g)


def test_empty_state_is_a_warning():
    g = parse_spec("state INITIAL:\n  'a' -> EMPTY\nstate EMPTY:\n")
    warnings = validate_grammar(g)
    assert len(warnings) == 1
    assert "EMPTY" in warnings[0]
