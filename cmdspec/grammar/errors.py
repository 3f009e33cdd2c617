"""오류 메시지 유틸: 라인 번호 + 원문 스니펫 + 캐럿"""

from __future__ import annotations
from typing import Optional


def snippet_with_caret(text: str, col: int) -> str:
    """col(1-based) 위치에 캐럿"""
    caret = " " * max(col - 1, 0) + "^"
    return f"{text}\n{caret}"


def spec_error(message: str, line: int, text: Optional[str] = None, col: int = 1) -> SyntaxError:
    """
    .spec 처리 중의 치명적 오류를 SyntaxError로 만든다.
    생성 단계는 부분 출력 없이 중단되어야 하므로 호출 측은 그대로 raise 한다.
    """
    msg = f"line {line}: {message}"
    if text is not None:
        msg += "\n" + snippet_with_caret(text, col)
    err = SyntaxError(msg)
    err.lineno = line
    return err
