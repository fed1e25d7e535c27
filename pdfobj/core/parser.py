"""
PDF 객체 파서 - 재귀 하강

바이트 스트림에서 PDF 객체 하나(또는 간접 객체 하나)를 읽어 객체 트리를 만든다.

핵심:
1. 다음 바이트를 보고 타입별 파싱으로 분기
2. 숫자 / 참조(N G R) / 간접 객체(N G obj ... endobj)의 모호성 해결
   - 제한된 미리보기 + 실패 시 커서 복원
3. 스트림 본문을 /Length 만큼 정확히 읽고 FlateDecode 압축 해제
4. 중첩 깊이 제한 (악의적 입력에 대한 호출 스택 보호)

자식을 모두 파싱한 뒤에만 부모 노드를 만들기 때문에 실패 시
부분적으로 만들어진 객체는 반환되지 않는다.
"""

from typing import BinaryIO, Iterator, Optional, Union

from ..config import ParserConfig
from ..exceptions import (
    LengthMismatchError, NestingDepthError, PDFSyntaxError, UnsupportedFeatureError
)
from ..utils.logging import get_logger
from .byte_stream import bytes_till_end, inflate_stream, slurp_bytes
from .lexer import PDFLexer
from .objects import (
    PDFArray, PDFBool, PDFDict, PDFIndirectObject, PDFInteger, PDFName, PDFNull,
    PDFReal, PDFRef, PDFStream, PDFString, PDFValue
)
from .stream_decoder import StreamDecoder

logger = get_logger(__name__)

ParseResult = Union[PDFValue, PDFIndirectObject]

_KEYWORDS = {
    b'null': PDFNull(),
    b'true': PDFBool(True),
    b'false': PDFBool(False),
}

_NUMBER_START = b'0123456789+-.'


class _Nesting:
    """배열/딕셔너리/간접 객체 본문으로 한 단계 내려감"""

    def __init__(self, parser: 'PDFParser'):
        self.parser = parser

    def __enter__(self):
        parser = self.parser
        parser._depth += 1
        parser._deepest = max(parser._deepest, parser._depth)
        if parser._depth > parser.config.max_depth:
            depth = parser._depth
            parser._depth -= 1
            raise NestingDepthError(depth, parser.config.max_depth, parser.lexer.tell())

    def __exit__(self, exc_type, exc, tb):
        self.parser._depth -= 1
        return False


class PDFParser:
    """PDF 객체 파서"""

    def __init__(self, source: Union[bytes, bytearray, BinaryIO],
                 config: Optional[ParserConfig] = None):
        self.lexer = PDFLexer(source)
        self.config = config or ParserConfig()
        self._depth = 0
        self._deepest = 0

    @property
    def stream(self) -> BinaryIO:
        return self.lexer.stream

    def _nested(self) -> _Nesting:
        return _Nesting(self)

    # -- 진입점 ------------------------------------------------------------

    def parse_pdf_obj(self) -> ParseResult:
        """다음 객체 하나 파싱 (값 또는 간접 객체)

        재귀 한도가 max_depth보다 먼저 닿아도 NestingDepthError로 보고한다.
        """
        depth = self._depth
        self._deepest = depth
        try:
            return self._parse_value()
        except RecursionError:
            # 풀리는 도중 __exit__가 호출되지 못했을 수 있다
            self._depth = depth
            raise NestingDepthError(self._deepest, self.config.max_depth, self.lexer.tell()) from None

    def _parse_value(self) -> ParseResult:
        lexer = self.lexer
        lexer.skip_whitespace()
        pos = lexer.tell()
        ch = lexer.peek()

        if not ch:
            raise PDFSyntaxError("Unexpected end of data", pos)

        if ch == b'/':
            return self.parse_pdf_name()

        if ch == b'(':
            return self.parse_pdf_string()

        if ch == b'<':
            if lexer.peek(2) == b'<<':
                return self.parse_pdf_dict()
            raise UnsupportedFeatureError("Hexadecimal strings are not supported", pos)

        if ch == b'[':
            return self.parse_pdf_array()

        if ch in _NUMBER_START:
            return self.parse_pdf_num_ref_or_top_level()

        if ch == b'%':
            raise UnsupportedFeatureError("Comments are not supported", pos)

        if ch.isalpha():
            token = lexer.read_regular_token()
            if token in _KEYWORDS:
                return _KEYWORDS[token]
            lexer.seek(pos)
            raise PDFSyntaxError(f"Unexpected keyword {token!r}", pos)

        raise PDFSyntaxError(f"Unexpected character {ch!r}", pos)

    def parse_top_level_obj(self) -> PDFIndirectObject:
        """N G obj ... endobj 하나 파싱"""
        self.lexer.skip_whitespace()
        pos = self.lexer.tell()
        obj = self.parse_pdf_obj()
        if not isinstance(obj, PDFIndirectObject):
            raise PDFSyntaxError("Expected indirect object 'N G obj'", pos)
        return obj

    def iter_objects(self) -> Iterator[ParseResult]:
        """EOF까지 연속된 객체를 차례로 파싱"""
        while True:
            self.lexer.skip_whitespace()
            if self.lexer.at_eof():
                return
            yield self.parse_pdf_obj()

    # -- 단순 타입 ---------------------------------------------------------

    def parse_pdf_name(self) -> PDFName:
        """Name 파싱: /Type"""
        pos = self.lexer.tell()
        if self.lexer.read() != b'/':
            self.lexer.seek(pos)
            raise PDFSyntaxError("Expected name", pos)
        return PDFName(self.lexer.get_name_token())

    def parse_pdf_string(self) -> PDFString:
        """리터럴 문자열 파싱: (Hello (nested) World)

        괄호 중첩만 추적하고 내용은 그대로 보관한다.
        """
        lexer = self.lexer
        start = lexer.tell()
        lexer.read()  # '(' 스킵
        result = bytearray()
        depth = 1

        while True:
            ch = lexer.read()
            if not ch:
                raise PDFSyntaxError("Unterminated string", start)
            if ch == b'\\':
                raise UnsupportedFeatureError(
                    "String escape sequences are not supported", lexer.tell() - 1)
            if ch == b'(':
                depth += 1
            elif ch == b')':
                depth -= 1
                if depth == 0:
                    break
            result += ch

        return PDFString(bytes(result))

    def parse_pdf_int_or_real(self) -> Union[PDFInteger, PDFReal]:
        """숫자 토큰 하나를 Integer 또는 Real로 파싱"""
        lexer = self.lexer
        pos = lexer.tell()

        value = lexer.parse_int()
        if value is not None:
            return PDFInteger(value)

        real = lexer.parse_double()
        if real is not None:
            return PDFReal(real)

        token = lexer.read_regular_token()
        lexer.seek(pos)
        raise PDFSyntaxError(f"Invalid number {token!r}", pos)

    # -- 모호성 해결 -------------------------------------------------------

    def parse_pdf_num_ref_or_top_level(self) -> ParseResult:
        """
        숫자 / 참조 / 간접 객체 구분

        1. 첫 숫자가 Real이면 바로 반환
        2. Integer이면 위치를 기억하고 두 번째 Integer(세대 번호) 시도
           - 실패 → 위치 복원 후 첫 Integer 반환
           - 다음 토큰이 R → 참조
           - 다음 토큰이 obj → 값 하나 파싱 후 endobj 필수
           - 그 외 → 위치 복원 후 첫 Integer 반환
        """
        lexer = self.lexer
        start = lexer.tell()
        first = self.parse_pdf_int_or_real()
        if isinstance(first, PDFReal):
            return first

        saved_pos = lexer.tell()
        lexer.skip_whitespace()
        second = lexer.parse_int()
        if second is None:
            lexer.seek(saved_pos)
            return first

        lexer.skip_whitespace()
        if lexer.match_keyword(b'R'):
            return PDFRef(first.value, second)

        if lexer.match_keyword(b'obj'):
            if self._depth > 0:
                raise PDFSyntaxError("Indirect object is not allowed inside another object", start)
            return self._parse_indirect_body(first.value, second, start)

        # 참조가 아니면 위치 복원
        lexer.seek(saved_pos)
        return first

    def _parse_indirect_body(self, obj_num: int, gen_num: int, start: int) -> PDFIndirectObject:
        with self._nested():
            value = self._parse_value()

        self.lexer.skip_whitespace()
        if not self.lexer.match_keyword(b'endobj'):
            raise PDFSyntaxError(
                f"Missing 'endobj' for object {obj_num} {gen_num}", self.lexer.tell())

        return PDFIndirectObject(obj_num, gen_num, value)

    # -- 복합 타입 ---------------------------------------------------------

    def parse_pdf_array(self) -> PDFArray:
        """배열 파싱: [ ... ]"""
        lexer = self.lexer
        start = lexer.tell()
        lexer.read()  # '[' 스킵
        items = []

        with self._nested():
            while True:
                lexer.skip_whitespace()
                ch = lexer.peek()
                if not ch:
                    raise PDFSyntaxError("Unterminated array", start)
                if ch == b']':
                    lexer.read()
                    break
                items.append(self._parse_value())

        return PDFArray(items)

    def parse_pdf_dict(self) -> Union[PDFDict, PDFStream]:
        """딕셔너리 파싱: << /Key value ... >>, 뒤에 stream이 오면 스트림 파싱"""
        lexer = self.lexer
        start = lexer.tell()
        lexer.read(2)  # '<<' 스킵
        entries = {}

        with self._nested():
            while True:
                lexer.skip_whitespace()
                pos = lexer.tell()
                ch = lexer.peek(2)
                if ch == b'>>':
                    lexer.read(2)
                    break
                if not ch:
                    raise PDFSyntaxError("Unterminated dictionary", start)
                if ch[:1] != b'/':
                    raise PDFSyntaxError(f"Expected name key in dictionary, got {ch[:1]!r}", pos)

                key = self.parse_pdf_name()
                lexer.skip_whitespace()
                value = self._parse_value()
                if key in entries:
                    logger.debug("Duplicate dictionary key /%s at offset %d, last value wins",
                                 key, pos)
                entries[key] = value

        pdf_dict = PDFDict(entries)

        # stream 키워드 확인 (없으면 '>>' 바로 뒤로 복원)
        after_dict = lexer.tell()
        lexer.skip_whitespace()
        if lexer.match_keyword(b'stream'):
            return self._parse_stream_body(pdf_dict)
        lexer.seek(after_dict)
        return pdf_dict

    def _parse_stream_body(self, stream_dict: PDFDict) -> PDFStream:
        """stream ... endstream 본문 파싱 ('stream' 키워드 직후에서 시작)"""
        lexer = self.lexer

        # stream 뒤의 EOL (\r\n 또는 \n)
        eol_pos = lexer.tell()
        ch = lexer.read()
        if ch == b'\r':
            if lexer.peek() == b'\n':
                lexer.read()
        elif ch != b'\n':
            raise PDFSyntaxError("Expected end-of-line after 'stream'", eol_pos)

        length = self._stream_length(stream_dict)
        data_start = lexer.tell()

        available = bytes_till_end(self.stream)
        if length > available:
            raise LengthMismatchError(
                f"Stream /Length {length} exceeds {available} remaining bytes", data_start)

        lexer.seek(data_start + length)
        lexer.skip_whitespace()
        if not lexer.match_keyword(b'endstream'):
            raise LengthMismatchError(
                f"'endstream' not found after {length} stream bytes", lexer.tell())
        end_pos = lexer.tell()

        filter_name = StreamDecoder.filter_name(stream_dict.get('Filter'))
        lexer.seek(data_start)
        if self.config.decode_streams and StreamDecoder.is_supported(filter_name):
            data = inflate_stream(self.stream, length)
            logger.debug("Inflated stream at offset %d: %d -> %d bytes",
                         data_start, length, len(data))
        else:
            if filter_name is not None:
                logger.debug("Keeping raw bytes for stream filter /%s at offset %d",
                             filter_name.decode('latin-1'), data_start)
            data = lexer.read(length)
        lexer.seek(end_pos)

        return PDFStream(stream_dict, data)

    def _stream_length(self, stream_dict: PDFDict) -> int:
        """스트림 딕셔너리의 직접 /Length 값"""
        pos = self.lexer.tell()
        length = stream_dict.get('Length')

        if isinstance(length, PDFRef):
            # 참조 해석은 문서 수준 정보가 필요함
            raise UnsupportedFeatureError(f"Indirect stream /Length {length!r} is not supported", pos)
        if not isinstance(length, PDFInteger):
            raise PDFSyntaxError("Stream dictionary requires a direct integer /Length", pos)
        if length.value < 0:
            raise PDFSyntaxError(f"Negative stream /Length {length.value}", pos)
        return length.value


def parse(data: Union[bytes, bytearray, BinaryIO],
          config: Optional[ParserConfig] = None) -> ParseResult:
    """바이트(또는 스트림)에서 객체 하나 파싱"""
    return PDFParser(data, config).parse_pdf_obj()


def parse_file(filepath: str, offset: int = 0,
               config: Optional[ParserConfig] = None) -> ParseResult:
    """파일의 offset 위치에서 객체 하나 파싱"""
    parser = PDFParser(slurp_bytes(filepath), config)
    parser.lexer.seek(offset)
    return parser.parse_pdf_obj()
