"""명령 문법(.spec) 파일 로더"""

from __future__ import annotations
from pathlib    import Path
from typing     import List


def load_spec_text(path: str) -> str:
    """
    .spec 파일을 읽어 개행을 '\\n'으로 정규화한 문자열을 돌려준다.
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_spec_lines(path: str) -> List[str]:
    return load_spec_text(path).split("\n")
