"""cmdspec 문법 파서
- `state NAME:`                       현재 상태 컨텍스트 전환 (NAME = [A-Z_]+)
- `[ident =] tok(, tok)* -> action`   토큰 정의
    * action 비어 있음        → Stay (현재 상태 유지)
    * action = STATE          → Transition
    * action = call f(...)[; STATE] → Call (복귀 상태 생략 시 INITIAL)
- 토큰: 'literal' 또는 토큰 클래스 이름(string, word, number, end ...)
- 한 줄의 토큰 여러 개는 같은 식별자/액션을 공유하는 Rule 여러 개가 된다.
"""

from __future__ import annotations
from typing import Iterable, List, Optional
import regex as re

from .ast import Grammar, Rule, Action, Stay, Transition, Call, CallSpec
from .errors import spec_error
from .joiner import LogicalLine, join_lines

STATE_DECL_RE = re.compile(r"^state ([A-Z_]+):\s*$")

RULE_RE = re.compile(
    r"""
    ^\s*                          # 앞 공백
    (?:(?P<ident>[a-z_]+)\s*=\s*)?  # (옵션) 캡처 식별자
    (?P<tokens>.*?)               # 토큰 목록
    ->\s*
    (?P<action>.*?)\s*$           # (옵션) 액션
    """,
    re.X,
)

LITERAL_TOKEN_RE = re.compile(r"^'[^']+'$")
CLASS_TOKEN_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
STATE_NAME_RE = re.compile(r"^[A-Z_]+$")

CALL_MARKER = "call "
CALL_RE = re.compile(
    r"^call\s+(?P<template>.+?)(?:\s*;\s*(?P<state>[A-Z_]+))?$"
)
# 컨텍스트 인자를 주입하려면 `name(...)` 형태여야 한다
INVOCATION_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*\s*\(.*\)$")


def _parse_action(ll: LogicalLine, action: str, col: int) -> Action:
    if not action:
        return Stay()

    if action.startswith(CALL_MARKER):
        m = CALL_RE.match(action)
        if not m or not INVOCATION_RE.match(m.group("template")):
            raise spec_error(f"malformed call action {action!r} (expected 'call f(...)[; STATE]')",
                             ll.line, ll.text, col)
        return Call(CallSpec(m.group("template"), m.group("state")))

    if not STATE_NAME_RE.match(action):
        raise spec_error(f"malformed action {action!r} (expected STATE or 'call ...')",
                         ll.line, ll.text, col)
    return Transition(action)


def _split_tokens(ll: LogicalLine, segment: str, col: int) -> List[str]:
    tokens = re.sub(r"\s+", "", segment)
    if not tokens:
        raise spec_error("token definition without tokens", ll.line, ll.text, col)
    out: List[str] = []
    for tok in tokens.split(","):
        if not (LITERAL_TOKEN_RE.match(tok) or CLASS_TOKEN_RE.match(tok)):
            raise spec_error(f"malformed token {tok!r} (expected 'literal' or a token class name)",
                             ll.line, ll.text, col)
        out.append(tok)
    return out


def parse_logical_lines(lines: Iterable[LogicalLine]) -> Grammar:
    g = Grammar()
    current: Optional[str] = None

    for ll in lines:
        m = STATE_DECL_RE.match(ll.text)
        if m:
            current = m.group(1)
            g.declare(current, ll.line)
            continue

        m = RULE_RE.match(ll.text)
        if not m:
            raise spec_error("malformed token definition (expected '[identifier =] tokens -> action')",
                             ll.line, ll.text, 1)
        if current is None:
            raise spec_error("token definition outside of any 'state NAME:' block",
                             ll.line, ll.text, 1)

        tokens = _split_tokens(ll, m.group("tokens"), m.start("tokens") + 1)
        action = _parse_action(ll, m.group("action"), m.start("action") + 1)
        ident = m.group("ident")

        for tok in tokens:
            g.states[current].append(Rule(token=tok, identifier=ident, action=action, line=ll.line))

    return g


def parse_spec(src: str) -> Grammar:
    """소스 문자열 전체 → Grammar (검증은 validate.validate_grammar 에서)."""
    return parse_logical_lines(join_lines(src.split("\n")))
