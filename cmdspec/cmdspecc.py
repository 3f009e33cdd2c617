# cmdspec/cmdspecc.py
"""cmdspecc – cmdspec CLI

사용 예)
    $ python -m cmdspec.cmdspecc check parser-specs/commands.spec -D
    $ python -m cmdspec.cmdspecc build parser-specs/commands.spec -o build/
    $ python -m cmdspec.cmdspecc build parser-specs/config.spec -o build/ --prefix GENERATED_config_

기능
----
- check : .spec을 읽어 파이프라인(조인→모델→검증→호출 테이블) 검증 및 요약 출력
- build : .spec을 읽어 C 헤더 3종(<prefix>enums.h / call.h / tokens.h) 방출

디버그 모드(-D/--debug)를 켜면 단계별 요약과 모델/호출 테이블 덤프를 출력합니다.
"""

from __future__ import annotations
import argparse
import pathlib
import sys
from typing import List, Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_pipeline(spec_path: str, debug: bool, conv=None):
    """
    .spec 파일을 읽어 논리 라인→Grammar→검증→호출 테이블→IR 까지 생성.
    반환: (원본 Grammar, 해석된 Grammar, calls, ir)
    """
    from .grammar.loader import load_spec_lines
    from .grammar.joiner import join_lines
    from .grammar.parser import parse_logical_lines
    from .grammar.validate import validate_grammar
    from .codegen.calls import CallConvention, build_call_table
    from .codegen.ir import build_ir

    lines = list(join_lines(load_spec_lines(spec_path)))
    if debug: _eprint("[DEBUG] logical lines ready | lines=%d" % len(lines))

    g = parse_logical_lines(lines)
    if debug: _eprint("[DEBUG] model ready | states=%d rules=%d" % (len(g.states), g.rule_count))

    for w in validate_grammar(g):
        _eprint(f"[WARN] {w}")
    if debug: _eprint("[DEBUG] model validated")

    resolved, calls = build_call_table(g, conv or CallConvention())
    if debug: _eprint("[DEBUG] call table built | calls=%d" % len(calls))

    ir = build_ir(resolved, calls)
    if debug: _eprint("[DEBUG] IR ready | states=%d (incl. __CALL) rows=%d" % (len(ir.states), ir.n_rows))

    return g, resolved, calls, ir

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_model(g) -> None:
    _eprint("\n[MODEL]\n" + repr(g))

def _print_calls(calls) -> None:
    from .codegen.calls import pretty_calls
    _eprint("\n[CALLS]")
    _eprint(pretty_calls(calls))

def _print_states(ir) -> None:
    _eprint("\n[STATES]")
    _eprint("  " + ", ".join(f"{s}={ir.state_ids[s]}" for s in ir.states))

# ------------------------------
# 커맨드 구현
# ------------------------------

def _convention(args):
    from .codegen.calls import CallConvention
    kw = {}
    if getattr(args, "context", None) is not None:
        kw["context"] = tuple(args.context)
    if getattr(args, "accessor", None):
        kw["accessor"] = args.accessor
    return CallConvention(**kw)


def cmd_check(args) -> int:
    try:
        g, resolved, calls, ir = _load_pipeline(args.file, debug=args.debug)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_model(resolved)
        _print_states(ir)
        _print_calls(calls)

    print(f"[CHECK OK] states={len(ir.declared_states)} rules={ir.n_rows} calls={len(calls)}")
    return 0


def cmd_build(args) -> int:
    from .codegen.emit_c import EmitOptions, emit_all
    try:
        g, resolved, calls, ir = _load_pipeline(args.file, debug=args.debug, conv=_convention(args))
        opts = EmitOptions(prefix=args.prefix, test_macro=args.test_macro)
        outputs = emit_all(ir, opts)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_model(resolved)
        _print_states(ir)
        _print_calls(calls)

    out_dir = pathlib.Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)
    for name, src in outputs.items():
        out_path = out_dir / name
        out_path.write_text(src, encoding="utf-8")
        print(f"[EMIT] {out_path}")
        if args.debug:
            _eprint(f"[DEBUG] {name} bytes={len(src)}")
    return 0


# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="cmdspecc", description="cmdspec command parser table generator")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 검사하고 상태/규칙/호출 수를 요약합니다")
    p_check.add_argument("file", help=".spec 문법 파일")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_build = sub.add_parser("build", help="C 헤더(enums/call/tokens)를 생성합니다")
    p_build.add_argument("file", help=".spec 문법 파일")
    p_build.add_argument("-o", "--output", default=".", help="출력 디렉터리 (기본: 현재 디렉터리)")
    p_build.add_argument("--prefix", default="GENERATED_", help="출력 파일명/call 함수명 접두사")
    p_build.add_argument("--context", nargs="*", metavar="ARG",
                         help="모든 호출 앞에 주입할 인자 (기본: &current_match result)")
    p_build.add_argument("--accessor", help="캡처 문자열 조회 함수 이름 (기본: get_string)")
    p_build.add_argument("--test-macro", default="TEST_PARSER", help="디버그 printf 빌드 전처리기 매크로")
    p_build.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_build.set_defaults(func=cmd_build)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
