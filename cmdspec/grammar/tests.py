from __future__ import annotations
from pathlib import Path
from .loader import load_spec_text
from .parser import parse_spec
from .validate import validate_grammar
from .ast import Grammar
from ..codegen.calls import build_call_table, pretty_calls
from ..codegen.ir import build_ir, CodegenIR
from ..codegen.emit_c import emit_all

COMMANDS = Path(__file__).resolve().parent.parent / "tests" / "spec_test" / "commands.spec"

def _print_model(g: Grammar) -> None:
    print("\n[MODEL]")
    print(repr(g))
    print(f"\nStates: {len(g.states)}  Rules: {g.rule_count}")

def _print_states(ir: CodegenIR) -> None:
    """enum 값(상태 번호)을 출력합니다."""
    print("\n[STATES]")
    for name in ir.states:
        print(f"{name:>20} = {ir.state_ids[name]}")

def _print_token_tables(ir: CodegenIR) -> None:
    print("\n[TOKENS]")
    for name, rows in ir.token_tables:
        print(f"{name} ({len(rows)})")
        for r in rows:
            print(f"  {r.pattern!r:>20} {r.identifier!r:>12} -> {r.next_state} [{r.call_id}]")

def _print_emit_preview(ir: CodegenIR) -> None:
    """세 헤더를 문자열로 생성한 뒤 앞부분만 프리뷰한다."""
    outputs = emit_all(ir)
    print("\n[Emit C Preview]")
    for name, src in outputs.items():
        print(f"--- {name} ({len(src)} bytes) ---")
        lines = src.splitlines()
        for i in range(min(12, len(lines))):
            print(lines[i])
        if len(lines) > 12:
            print("... (snip) ...")


def main() -> None:
    try:
        text = load_spec_text(str(COMMANDS))
        g = parse_spec(text)
        for w in validate_grammar(g):
            print(f"[WARN] {w}")
        _print_model(g)
        resolved, calls = build_call_table(g)
        print("\n[CALLS]")
        print(pretty_calls(calls))
        ir = build_ir(resolved, calls)
        _print_states(ir)
        _print_token_tables(ir)
        _print_emit_preview(ir)
    except SyntaxError as e:
        # 친절한 메시지만 출력(Traceback 숨김)
        print(str(e))


if __name__ == "__main__":
    main()
