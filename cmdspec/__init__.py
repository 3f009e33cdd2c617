"""cmdspec – 명령 문법(.spec)을 테이블 기반 명령 파서용 C 테이블로 컴파일하는 생성기"""

__version__ = "0.1.0"
