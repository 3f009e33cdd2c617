from __future__ import annotations

from cmdspec.grammar.parser import parse_spec
from cmdspec.grammar.ast import Call, Dispatch, Stay, Transition
from cmdspec.codegen.calls import (
    CallConvention, build_call_table, make_real_invocation, make_debug_format, make_debug_args,
)

CONV = CallConvention()


def test_real_invocation_empty_argument_list():
    assert make_real_invocation("quit()", CONV) == "quit(&current_match, result)"


def test_real_invocation_prepends_context():
    assert make_real_invocation("switch_workspace($workspace)", CONV) == \
        'switch_workspace(&current_match, result, get_string("workspace"))'


def test_real_invocation_custom_convention():
    conv = CallConvention(context=("ctx",), accessor="fetch")
    assert make_real_invocation("f()", conv) == "f(ctx)"
    assert make_real_invocation('f($a, "x")', conv) == 'f(ctx, fetch("a"), "x")'


def test_debug_format_and_args():
    tpl = 'cmd_workspace_number($workspace, "number")'
    assert make_debug_format(tpl) == "cmd_workspace_number(%s, %s)"
    assert make_debug_args(tpl, CONV) == 'get_string("workspace"), "number"'
    assert make_debug_format("quit()") == "quit()"
    assert make_debug_args("quit()", CONV) == ""


def test_debug_format_escapes_percent():
    assert make_debug_format("resize($amount, 10%)") == "resize(%s, 10%%)"


GRAMMAR = """
state INITIAL:
  'a' -> call first()
  'b' -> B
  'c', 'd' -> call second(); B
state B:
  x = string -> call third($x)
  end ->
"""


def test_ids_follow_state_then_rule_order():
    g = parse_spec(GRAMMAR)
    resolved, calls = build_call_table(g)
    assert [c.call_id for c in calls] == [0, 1, 2, 3]
    assert [c.real_invocation.split("(")[0] for c in calls] == ["first", "second", "second", "third"]
    assert [c.return_state for c in calls] == ["INITIAL", "B", "B", "INITIAL"]
    assert [r.action for r in resolved.states["INITIAL"]] == [
        Dispatch(0, "INITIAL"), Transition("B"), Dispatch(1, "B"), Dispatch(2, "B"),
    ]
    assert [r.action for r in resolved.states["B"]] == [Dispatch(3, "INITIAL"), Stay()]


def test_input_model_is_not_mutated():
    g = parse_spec(GRAMMAR)
    before = repr(g)
    resolved, _calls = build_call_table(g)
    assert repr(g) == before
    assert isinstance(g.states["INITIAL"][0].action, Call)
    assert resolved.state_names == g.state_names


def test_tokens_and_identifiers_untouched():
    g = parse_spec(GRAMMAR)
    resolved, _calls = build_call_table(g)
    for name in g.states:
        assert [(r.token, r.identifier, r.line) for r in g.states[name]] == \
            [(r.token, r.identifier, r.line) for r in resolved.states[name]]


def test_same_call_text_is_not_deduplicated():
    g = parse_spec("state INITIAL:\n  'a' -> call f()\n  'b' -> call f()\n")
    _resolved, calls = build_call_table(g)
    assert len(calls) == 2
    assert calls[0].real_invocation == calls[1].real_invocation
