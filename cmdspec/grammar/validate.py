"""모델 확정 단계의 검증

런타임 파서는 잘못된 상태 인덱스에서 복구할 방법이 없으므로
참조된 모든 상태 이름이 선언되어 있는지 생성 시점에 확인한다.
"""

from __future__ import annotations
from typing import List, Optional

from .ast import Grammar, Transition, Call, Dispatch, CALL_SENTINEL
from .errors import spec_error


def referenced_state(action) -> Optional[str]:
    if isinstance(action, Transition):
        return action.target
    if isinstance(action, Call):
        return action.spec.effective_return_state
    if isinstance(action, Dispatch):
        return action.return_state
    return None


def validate_grammar(g: Grammar) -> List[str]:
    """
    치명적 오류는 SyntaxError로 raise, 경고는 문자열 리스트로 돌려준다.
    - 사용자 상태가 예약어 __CALL 과 충돌
    - Transition 대상 / call 복귀 상태(기본 INITIAL 포함)가 미선언
    - (경고) 규칙이 하나도 없는 상태
    """
    if CALL_SENTINEL in g.states:
        raise spec_error(f"state name {CALL_SENTINEL} is reserved", g.state_lines[CALL_SENTINEL])

    for state, rule in g.iter_rules():
        target = referenced_state(rule.action)
        if target is not None and target not in g.states:
            raise spec_error(
                f"state {state}: token {rule.token} refers to undeclared state {target}",
                rule.line,
            )

    warnings: List[str] = []
    for name, rules in g.states.items():
        if not rules:
            warnings.append(f"state {name} (line {g.state_lines[name]}) has no token definitions")
    return warnings
