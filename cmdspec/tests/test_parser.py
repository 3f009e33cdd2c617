from __future__ import annotations
import pytest

from cmdspec.grammar.parser import parse_spec
from cmdspec.grammar.ast import Stay, Transition, Call, CallSpec


def test_single_call_rule():
    g = parse_spec("state INITIAL:\n    'exit' -> call quit()\n")
    assert g.state_names == ["INITIAL"]
    [r] = g.states["INITIAL"]
    assert r.token == "'exit'"
    assert r.identifier is None
    assert r.action == Call(CallSpec("quit()", None))
    assert r.action.spec.effective_return_state == "INITIAL"
    assert r.line == 2


def test_capture_and_return_state():
    src = (
        "state INITIAL:\n"
        "    workspace = STR -> call switch_workspace($workspace); WORKSPACE_STATE\n"
        "state WORKSPACE_STATE:\n"
        "    end -> INITIAL\n"
    )
    g = parse_spec(src)
    [r] = g.states["INITIAL"]
    assert r.identifier == "workspace"
    assert r.token == "STR"
    assert r.action == Call(CallSpec("switch_workspace($workspace)", "WORKSPACE_STATE"))


def test_empty_action_is_stay():
    g = parse_spec("state A:\n  'x' ->\n  end ->   \n")
    assert [r.action for r in g.states["A"]] == [Stay(), Stay()]


def test_transition():
    g = parse_spec("state A:\n  'go' -> B\nstate B:\n  end -> A\n")
    assert g.states["A"][0].action == Transition("B")
    assert g.states["B"][0].action == Transition("A")


def test_token_list_shares_identifier_and_action():
    g = parse_spec("state A:\n  dir = 'left' , 'right',\t'up' -> call move($dir)\n")
    rules = g.states["A"]
    assert [r.token for r in rules] == ["'left'", "'right'", "'up'"]
    assert {r.identifier for r in rules} == {"dir"}
    assert len({r.action for r in rules}) == 1


def test_state_order_is_first_appearance_and_redeclaration_appends():
    src = (
        "state ZED:\n  'a' -> ALPHA\n"
        "state ALPHA:\n  'b' -> ZED\n"
        "state ZED:\n  'c' ->\n"
    )
    g = parse_spec(src)
    assert g.state_names == ["ZED", "ALPHA"]
    assert [r.token for r in g.states["ZED"]] == ["'a'", "'c'"]
    assert g.state_lines["ZED"] == 1


def test_declared_state_without_rules_is_kept():
    g = parse_spec("state A:\nstate B:\n  end -> A\n")
    assert g.state_names == ["A", "B"]
    assert g.states["A"] == []


def test_multiline_definition():
    g = parse_spec("state A:\n  x = string\n      -> call f($x); A\n")
    [r] = g.states["A"]
    assert r.action == Call(CallSpec("f($x)", "A"))


@pytest.mark.parametrize("src", [
    "  'exit' -> call quit()\n",                         # before any state
    "state A:\n  'exit' call quit()\n",                  # no ->
    "state A:\n  -> B\n  'x' -> B\n",                    # continuation onto a state line
    "state A:\n  'unterminated -> A\n",                  # bad literal
    "state A:\n  'a',,'b' -> A\n",                       # empty token
    "state A:\n  x =  -> A\n",                           # no tokens
    "state A:\n  'a' -> lower\n",                        # bad transition target
    "state A:\n  'a' -> call not a call\n",              # call without (...)
])
def test_malformed_lines_are_fatal(src):
    with pytest.raises(SyntaxError) as ei:
        parse_spec(src)
    assert "line " in str(ei.value)
