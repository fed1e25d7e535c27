"""
PDF 어휘 분석 기본 요소

토큰화 없이 바이트 스트림 위에서 직접 동작한다.
- 공백/구분자 판별
- Name, 숫자, 키워드 토큰 읽기
- 커서 저장/복원 (되돌아가기용)

숫자 토큰 파싱(parse_int, parse_double)은 실패 시 예외 대신 None을 반환하고
커서를 원래 위치로 되돌린다. 호출자는 이를 일반 분기로 처리한다.
"""

import io
import re
from typing import BinaryIO, Optional, Union

from .objects import INT64_MAX, INT64_MIN

# 공백 문자: NUL, TAB, LF, FF, CR, SPACE
WHITESPACE = b'\x00\t\n\x0c\r '
# 구분자 문자
DELIMITERS = b'()<>[]{}/%'

_INT_RE = re.compile(rb'[+-]?\d+')
_REAL_RE = re.compile(rb'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def is_whitespace(ch: bytes) -> bool:
    """PDF 공백 바이트 여부 (EOF는 공백이 아님)"""
    return len(ch) == 1 and ch in WHITESPACE


def ends_name(ch: bytes) -> bool:
    """Name 토큰을 끝내는 바이트인지 (구분자, 공백, EOF)"""
    return not ch or ch in WHITESPACE or ch in DELIMITERS


def valid_name_char(ch: bytes) -> bool:
    return not ends_name(ch)


class PDFLexer:
    """읽기/탐색 가능한 바이트 스트림 위의 PDF 어휘 분석기"""

    def __init__(self, source: Union[bytes, bytearray, BinaryIO]):
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(bytes(source))
        elif not source.seekable():
            # 되돌아가기를 위해 메모리에 버퍼링
            source = io.BytesIO(source.read())
        self.stream = source

    # -- 커서 --------------------------------------------------------------

    def tell(self) -> int:
        return self.stream.tell()

    def seek(self, pos: int) -> None:
        self.stream.seek(pos)

    mark = tell
    reset = seek

    def peek(self, count: int = 1) -> bytes:
        """현재 위치에서 count 바이트 미리보기"""
        pos = self.stream.tell()
        data = self.stream.read(count)
        self.stream.seek(pos)
        return data

    def read(self, count: int = 1) -> bytes:
        """count 바이트 읽고 위치 이동"""
        return self.stream.read(count)

    def at_eof(self) -> bool:
        return not self.peek()

    # -- 토큰 --------------------------------------------------------------

    def skip_whitespace(self) -> None:
        """연속된 공백 바이트 스킵 (연속 호출해도 결과 동일)"""
        while True:
            ch = self.stream.read(1)
            if not is_whitespace(ch):
                if ch:
                    self.stream.seek(-1, io.SEEK_CUR)
                return

    def get_name_token(self) -> bytes:
        """'/' 다음의 Name 바이트 읽기 (종료 바이트는 소비하지 않음)"""
        name = bytearray()
        while True:
            ch = self.stream.read(1)
            if not valid_name_char(ch):
                if ch:
                    self.stream.seek(-1, io.SEEK_CUR)
                return bytes(name)
            name += ch

    def read_regular_token(self) -> bytes:
        """공백/구분자가 나올 때까지의 일반 문자 토큰 읽기"""
        return self.get_name_token()

    def parse_int(self) -> Optional[int]:
        """정수 토큰 파싱. 실패하면 위치를 복원하고 None 반환"""
        start = self.tell()
        token = self.read_regular_token()
        if _INT_RE.fullmatch(token):
            value = int(token)
            if INT64_MIN <= value <= INT64_MAX:
                return value
        self.seek(start)
        return None

    def parse_double(self) -> Optional[float]:
        """실수 토큰 파싱. 실패하면 위치를 복원하고 None 반환"""
        start = self.tell()
        token = self.read_regular_token()
        if _REAL_RE.fullmatch(token):
            value = float(token)
            if value not in (float('inf'), float('-inf')):
                return value
        self.seek(start)
        return None

    def match_keyword(self, keyword: bytes) -> bool:
        """다음 토큰이 keyword이면 소비하고 True, 아니면 위치 그대로 False"""
        start = self.tell()
        if self.read_regular_token() == keyword:
            return True
        self.seek(start)
        return False
