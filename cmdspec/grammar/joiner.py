# cmdspec/grammar/joiner.py
"""전처리: 주석/빈 줄 제거 + 여러 줄에 걸친 토큰 정의 합치기

    state INITIAL:
      'exit'
          -> call quit()

위처럼 `->` 로 시작하는 줄(앞 공백 무시)은 직전 논리 라인에 **구분자 없이** 이어 붙인다.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import regex as re

from .errors import spec_error

COMMENT_RE = re.compile(r"^\s*#")
BLANK_RE = re.compile(r"^\s*$")
CONTINUATION_RE = re.compile(r"^\s*->")


@dataclass
class LogicalLine:
    text: str
    line: int       # 논리 라인이 시작된 물리 라인 번호(1-based)


def join_lines(raw_lines: Iterable[str]) -> Iterator[LogicalLine]:
    """
    물리 라인 → 논리 라인 제너레이터.
    이어 붙이기가 끝났는지는 다음 비(非)연속 라인을 봐야 알 수 있으므로
    한 줄을 보류(pending)해 두었다가 내보낸다.
    """
    pending: Optional[LogicalLine] = None
    for no, raw in enumerate(raw_lines, start=1):
        if COMMENT_RE.match(raw) or BLANK_RE.match(raw):
            continue

        if CONTINUATION_RE.match(raw):
            if pending is None:
                raise spec_error("continuation line has no preceding definition", no, raw,
                                 raw.index("->") + 1)
            pending.text += raw
            continue

        if pending is not None:
            yield pending
        pending = LogicalLine(raw, no)

    if pending is not None:
        yield pending
