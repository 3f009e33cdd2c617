"""
cmdspec 코드 생성용 IR
=======

호출 테이블 해석이 끝난 Grammar와 CallEntry 리스트를 받아,
세 방출기(enum / call / tokens)가 **공통으로** 소비하는 중간표현으로 변환한다.

설계 포인트
-----------
- 상태 번호는 여기서 **한 번만** 계산하고 세 산출물이 모두 이것을 재사용한다.
  * [선언된 상태(최초 등장 순)] + ['__CALL'], 0부터 연속
- 토큰 행은 (pattern_text, identifier, next_state, call_id) 튜플이다.
  * 리터럴 'exit' 은 끝 따옴표를 떼어 'exit 로 방출한다.
    런타임은 첫 글자 ' 로 리터럴을 구분하고 strdup(literal + 1)로 본문을 얻는다.
  * 식별자가 없으면 "" (필드를 생략하지 않는다)
  * call 규칙이 아니면 call_id = 0
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..grammar.ast import Grammar, Rule, Stay, Transition, Dispatch, CALL_SENTINEL
from .calls import CallEntry


@dataclass
class TokenRow:
    pattern: str
    identifier: str
    next_state: str
    call_id: int = 0


@dataclass
class CodegenIR:
    """
    Fields
    ------
    states       : 상태 이름 리스트 (enum 값 순서, 마지막은 항상 '__CALL')
    state_ids    : 상태 이름 → enum 값
    token_tables : 선언 순서대로 (상태 이름, [TokenRow...]) ; '__CALL'은 포함하지 않음
    calls        : call_id 순서의 CallEntry
    """
    states: List[str]
    state_ids: Dict[str, int]
    token_tables: List[Tuple[str, List[TokenRow]]]
    calls: List[CallEntry] = field(default_factory=list)

    @property
    def declared_states(self) -> List[str]:
        return self.states[:-1]

    @property
    def n_rows(self) -> int:
        return sum(len(rows) for _name, rows in self.token_tables)


def emitted_pattern(token: str) -> str:
    """리터럴은 끝 따옴표 제거, 토큰 클래스는 그대로."""
    if token.startswith("'") and token.endswith("'") and len(token) > 1:
        return token[:-1]
    return token


def _token_row(state: str, r: Rule) -> TokenRow:
    a = r.action
    if isinstance(a, Stay):
        next_state, call_id = state, 0
    elif isinstance(a, Transition):
        next_state, call_id = a.target, 0
    elif isinstance(a, Dispatch):
        next_state, call_id = CALL_SENTINEL, a.call_id
    else:
        # Call이 남아 있다면 호출 테이블 빌더를 거치지 않은 모델이다
        raise ValueError(f"ir: unresolved action {a!r} in state {state} (line {r.line})")
    return TokenRow(emitted_pattern(r.token), r.identifier or "", next_state, call_id)


def build_ir(g: Grammar, calls: List[CallEntry]) -> CodegenIR:
    """
    build_ir(g, calls) -> CodegenIR
    -------------------------------
    g 는 build_call_table()이 돌려준 Grammar 여야 한다.
    """
    states = g.state_names + [CALL_SENTINEL]
    state_ids = {name: i for i, name in enumerate(states)}

    token_tables = [
        (name, [_token_row(name, r) for r in rules])
        for name, rules in g.states.items()
    ]

    ids = [c.call_id for c in calls]
    if ids != list(range(len(calls))):
        raise ValueError(f"ir: call ids are not contiguous from 0: {ids}")

    return CodegenIR(states=states, state_ids=state_ids, token_tables=token_tables, calls=list(calls))
