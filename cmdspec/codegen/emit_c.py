# cmdspec/codegen/emit_c.py
"""C 헤더 방출 (명령 파서용 생성 헤더 3종).

개요
----
- CodegenIR을 받아 C 소스 조각을 **문자열로** 생성한다.
- 방출물:
  * <prefix>enums.h  : `typedef enum { INITIAL = 0, ..., __CALL = N, } cmdp_state;`
  * <prefix>call.h   : `static void <prefix>call(const int call_identifier, struct CommandResult *result)`
                       call_id 별 switch-case. TEST_PARSER 정의 시 실제 호출 대신 printf.
  * <prefix>tokens.h : 상태별 `cmdp_token tokens_<STATE>[n]` + 인덱스 `cmdp_token_ptr tokens[N]`

주의
----
- 방출기는 **직렬화만** 한다. 문법 검증은 이전 단계의 책임이며,
  IR 불변식이 깨져 있으면 ValueError로 중단한다(복구 시도 없음).
- 빌드 모드 선택(실제 호출/디버그 printf)은 런타임 분기가 아니라 전처리기 스위치다.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List

from .ir import CodegenIR, TokenRow
from ..grammar.ast import CALL_SENTINEL


@dataclass(frozen=True)
class EmitOptions:
    prefix: str = "GENERATED_"       # 파일명 및 call 함수명 접두사
    test_macro: str = "TEST_PARSER"  # 정의되면 디버그 printf 빌드

    @property
    def call_fn(self) -> str:
        return f"{self.prefix}call"


# ---------- 유틸 ----------

def _c_str(s: str) -> str:
    """C 문자열 리터럴 본문 이스케이프."""
    return s.replace("\\", "\\\\").replace('"', '\\"')


def _preflight_check(ir: CodegenIR) -> None:
    """기본 불변식을 조기 검증하여 생성 단계에서 실패시킨다."""
    if not ir.states or ir.states[-1] != CALL_SENTINEL:
        raise ValueError(f"emit_c: state list must end with {CALL_SENTINEL}: {ir.states}")
    if [ir.state_ids[s] for s in ir.states] != list(range(len(ir.states))):
        raise ValueError("emit_c: state ids are not 0..N-1 in state order")
    if [name for name, _rows in ir.token_tables] != ir.declared_states:
        raise ValueError("emit_c: token tables are not in state declaration order")
    n_calls = len(ir.calls)
    for name, rows in ir.token_tables:
        for row in rows:
            if row.next_state not in ir.state_ids:
                raise ValueError(f"emit_c: state {name}: unknown next state {row.next_state}")
            if row.next_state == CALL_SENTINEL and not (0 <= row.call_id < n_calls):
                raise ValueError(
                    f"emit_c: state {name}: call id {row.call_id} out of range (calls={n_calls})"
                )


# ---------- 방출기 ----------

def emit_enums(ir: CodegenIR) -> str:
    _preflight_check(ir)
    lines = ["typedef enum {"]
    for name in ir.states:
        lines.append(f"    {name} = {ir.state_ids[name]},")
    lines.append("} cmdp_state;")
    return "\n".join(lines) + "\n"


def emit_call(ir: CodegenIR, opts: EmitOptions = EmitOptions()) -> str:
    _preflight_check(ir)
    lines = [
        f"static void {opts.call_fn}(const int call_identifier, struct CommandResult *result) {{",
        "    switch (call_identifier) {",
    ]
    for c in ir.calls:
        printf_args = f", {c.debug_args}" if c.debug_args else ""
        lines += [
            f"        case {c.call_id}:",
            f"#ifndef {opts.test_macro}",
            f"            {c.real_invocation};",
            "#else",
            f'            printf("{_c_str(c.debug_format)}\\n"{printf_args});',
            "#endif",
            f"            state = {c.return_state};",
            "            break;",
        ]
    lines += [
        "        default:",
        '            printf("BUG in the parser. state = %d\\n", call_identifier);',
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def _fmt_row(row: TokenRow) -> str:
    return f'    {{ "{_c_str(row.pattern)}", "{_c_str(row.identifier)}", {row.next_state}, {{ {row.call_id} }} }},'


def emit_tokens(ir: CodegenIR) -> str:
    _preflight_check(ir)
    lines: List[str] = []
    for name, rows in ir.token_tables:
        lines.append(f"cmdp_token tokens_{name}[{len(rows)}] = {{")
        lines.extend(_fmt_row(r) for r in rows)
        lines.append("};")

    lines.append(f"cmdp_token_ptr tokens[{len(ir.token_tables)}] = {{")
    for name, rows in ir.token_tables:
        lines.append(f"    {{ tokens_{name}, {len(rows)} }},")
    lines.append("};")
    return "\n".join(lines) + "\n"


def emit_all(ir: CodegenIR, opts: EmitOptions = EmitOptions()) -> Dict[str, str]:
    """파일명 → 내용. 세 산출물을 모두 만든 뒤에만 돌려준다(부분 출력 없음)."""
    return {
        f"{opts.prefix}enums.h": emit_enums(ir),
        f"{opts.prefix}call.h": emit_call(ir, opts),
        f"{opts.prefix}tokens.h": emit_tokens(ir),
    }
