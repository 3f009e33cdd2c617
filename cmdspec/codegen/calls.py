# cmdspec/codegen/calls.py
"""호출 테이블 빌더

Grammar를 상태 선언 순서 → 상태 내 규칙 순서로 순회하면서 Call 액션마다
전역 일련번호(call id, 0부터)를 부여하고, 해당 Rule을 Dispatch(call_id, 복귀상태)로
바꾼 **새 Grammar** 와 id 순서의 CallEntry 리스트를 돌려준다.

런타임은 호출 엔트리를 오직 정수 위치로만 찾으므로 순회 순서를 바꾸거나
중복 제거/필터링을 하면 디스패치가 조용히 어긋난다.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple
import regex as re

from ..grammar.ast import Grammar, Rule, Call, Dispatch

CAPTURE_REF_RE = re.compile(r"\$([a-z_]+)")
QUOTED_WORD_RE = re.compile(r'"([a-z0-9_]+)"')
INVOCATION_RE = re.compile(r"^(?P<name>[^(]+)\((?P<args>.*)\)$", re.S)


@dataclass(frozen=True)
class CallConvention:
    """
    생성되는 C 호출식의 규약.
    - context  : 모든 호출의 앞쪽에 주입되는 인자들
    - accessor : 캡처된 문자열을 이름으로 꺼내는 런타임 함수
    """
    context: Tuple[str, ...] = ("&current_match", "result")
    accessor: str = "get_string"


@dataclass
class CallEntry:
    """
    call_id         : 0..n-1, 전역 유일
    real_invocation : `$x` → accessor("x") 치환 + 컨텍스트 인자 주입 완료된 C 호출식
    debug_format    : 테스트 빌드용 printf 포맷 (`$x`, "word" → %s)
    debug_args      : printf 인자 (명시 인자만, 컨텍스트 제외; 없으면 "")
    return_state    : 호출 후 이동할 상태
    """
    call_id: int
    real_invocation: str
    debug_format: str
    debug_args: str
    return_state: str
    state: str = ""
    token: str = ""
    line: int = 0


def substitute_captures(template: str, conv: CallConvention) -> str:
    return CAPTURE_REF_RE.sub(lambda m: f'{conv.accessor}("{m.group(1)}")', template)


def _split_invocation(expr: str) -> Tuple[str, str]:
    m = INVOCATION_RE.match(expr)
    if not m:
        raise ValueError(f"calls: not a function call expression: {expr!r}")
    return m.group("name"), m.group("args").strip()


def make_real_invocation(template: str, conv: CallConvention) -> str:
    name, args = _split_invocation(substitute_captures(template, conv))
    parts = list(conv.context)
    if args:
        parts.append(args)
    return f"{name}({', '.join(parts)})"


def make_debug_format(template: str) -> str:
    fmt = template.replace("%", "%%")
    fmt = CAPTURE_REF_RE.sub("%s", fmt)
    return QUOTED_WORD_RE.sub("%s", fmt)


def make_debug_args(template: str, conv: CallConvention) -> str:
    _name, args = _split_invocation(substitute_captures(template, conv))
    return args


def build_call_table(g: Grammar, conv: CallConvention = CallConvention()) -> Tuple[Grammar, List[CallEntry]]:
    """
    build_call_table(g[, conv]) -> (새 Grammar, [CallEntry...])
    -----------------------------------------------------------
    - 입력 g는 변경하지 않는다.
    - id 카운터는 상태별이 아닌 **하나의 전역 카운터** 이다.
    - Call 이외의 Rule은 그대로 복사된다.
    """
    out = Grammar(state_lines=dict(g.state_lines))
    entries: List[CallEntry] = []

    for state, rules in g.states.items():
        new_rules: List[Rule] = []
        for r in rules:
            if not isinstance(r.action, Call):
                new_rules.append(r)
                continue

            call_id = len(entries)
            spec = r.action.spec
            ret = spec.effective_return_state
            entries.append(CallEntry(
                call_id=call_id,
                real_invocation=make_real_invocation(spec.template, conv),
                debug_format=make_debug_format(spec.template),
                debug_args=make_debug_args(spec.template, conv),
                return_state=ret,
                state=state,
                token=r.token,
                line=r.line,
            ))
            new_rules.append(r.with_action(Dispatch(call_id, ret)))
        out.states[state] = new_rules

    return out, entries


def pretty_calls(entries: List[CallEntry]) -> str:
    if not entries:
        return "(no calls)"
    return "\n".join(
        f"{e.call_id:4d}: {e.real_invocation} ; {e.return_state}   [{e.state} {e.token}, line {e.line}]"
        for e in entries
    )
