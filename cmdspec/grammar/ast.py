# cmdspec/grammar/ast.py
"""명령 문법(.spec) 모델
- Grammar: 상태 이름 → Rule 리스트 (등장 순서 보존)
- Rule   : 토큰 패턴 1개 + (옵션) 캡처 식별자 + Action
- Action : Stay | Transition | Call | Dispatch(호출 테이블 해석 이후)
"""

from __future__     import annotations
from dataclasses    import dataclass, field, replace
from typing         import Dict, List, Optional, Union

# 호출 테이블을 통해 다음 상태를 결정하라는 의사(pseudo) 상태
CALL_SENTINEL = "__CALL"

# call 액션에 복귀 상태가 없을 때의 기본값
DEFAULT_RETURN_STATE = "INITIAL"


@dataclass(frozen=True)
class Stay:
    """현재 상태에 머무른다(-> 뒤가 비어 있을 때의 기본 액션)."""


@dataclass(frozen=True)
class Transition:
    target: str


@dataclass(frozen=True)
class CallSpec:
    """
    call 액션 원문.
    - template    : `switch_workspace($workspace)` 처럼 치환 전 호출식
    - return_state: `; STATE` 로 지정된 복귀 상태(없으면 None → INITIAL)
    """
    template: str
    return_state: Optional[str] = None

    @property
    def effective_return_state(self) -> str:
        return self.return_state or DEFAULT_RETURN_STATE


@dataclass(frozen=True)
class Call:
    spec: CallSpec


@dataclass(frozen=True)
class Dispatch:
    """호출 테이블 빌더가 Call을 치환한 결과: call_id 로 디스패치 후 return_state 로 이동."""
    call_id: int
    return_state: str


Action = Union[Stay, Transition, Call, Dispatch]


@dataclass(frozen=True)
class Rule:
    token: str                       # "'exit'" (리터럴) 또는 "string" (토큰 클래스)
    identifier: Optional[str]        # 캡처 식별자, 없으면 None
    action: Action
    line: int = 0                    # 원본 .spec 라인 번호(1-based, 오류 메시지용)

    @property
    def is_literal(self) -> bool:
        return self.token.startswith("'")

    def with_action(self, action: Action) -> "Rule":
        return replace(self, action=action)


@dataclass
class Grammar:
    """
    states     : 상태 이름 → Rule 리스트. dict 삽입 순서 = 최초 등장 순서이며
                 enum 값/토큰 테이블 배열 배치를 결정하므로 절대 재정렬하지 않는다.
    state_lines: 상태가 처음 선언된 라인 번호
    """
    states: Dict[str, List[Rule]] = field(default_factory=dict)
    state_lines: Dict[str, int] = field(default_factory=dict)

    def declare(self, name: str, line: int = 0) -> None:
        if name not in self.states:
            self.states[name] = []
            self.state_lines[name] = line

    @property
    def state_names(self) -> List[str]:
        return list(self.states)

    def iter_rules(self):
        """(state, rule) 를 상태 순서 → 규칙 순서로 순회."""
        for name, rules in self.states.items():
            for r in rules:
                yield name, r

    @property
    def rule_count(self) -> int:
        return sum(len(rs) for rs in self.states.values())

    def __repr__(self) -> str:
        lines = []
        for name, rules in self.states.items():
            lines.append(f"state {name}: ({len(rules)} rules)")
            for r in rules:
                ident = f"{r.identifier} = " if r.identifier else ""
                lines.append(f"    {ident}{r.token} -> {r.action}")
        return "\n".join(lines)
