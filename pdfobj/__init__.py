"""
pdfobj - PDF Object Syntax Parser

PDF 객체 구문을 값 트리로 파싱하고 다시 PDF 구문으로 직렬화
- null, boolean, integer, real, string, name, array, dictionary, stream, reference
- N G obj ... endobj 간접 객체
- FlateDecode 스트림 압축 해제
- 외부 라이브러리 없이 순수 Python으로 구현

사용법:
    from pdfobj import parse, serialize

    obj = parse(b'<< /Type /Catalog /Pages 2 0 R >>')
    obj['Pages']            # Ref(2 0 R)
    serialize(obj)          # b'<< /Pages 2 0 R /Type /Catalog >>'

    # 파일의 특정 오프셋 (예: xref 항목)에서 간접 객체 파싱
    from pdfobj import parse_file
    obj = parse_file('document.pdf', offset=1234)

    # 설정
    from pdfobj import ParserConfig
    obj = parse(data, ParserConfig(max_depth=32, decode_streams=False))
"""
import logging

from .config import ParserConfig
from .exceptions import (
    PDFError, PDFIOError, PDFSyntaxError, LengthMismatchError, DecompressionError,
    UnsupportedFeatureError, NestingDepthError, ConfigurationError
)
from .core import (
    PDFObject, PDFValue,
    PDFNull, PDFBool, PDFInteger, PDFReal, PDFString, PDFName,
    PDFArray, PDFDict, PDFStream, PDFRef, PDFIndirectObject,
    PDFParser, PDFLexer, StreamDecoder,
    parse, parse_file, serialize,
    bytes_till_end, slurp_bytes, inflate_stream
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = '0.1.0'
__all__ = [
    # API
    'parse', 'parse_file', 'serialize', 'ParserConfig',
    # Objects
    'PDFObject', 'PDFValue',
    'PDFNull', 'PDFBool', 'PDFInteger', 'PDFReal', 'PDFString', 'PDFName',
    'PDFArray', 'PDFDict', 'PDFStream', 'PDFRef', 'PDFIndirectObject',
    # Parser
    'PDFParser', 'PDFLexer', 'StreamDecoder',
    'bytes_till_end', 'slurp_bytes', 'inflate_stream',
    # Errors
    'PDFError', 'PDFIOError', 'PDFSyntaxError', 'LengthMismatchError',
    'DecompressionError', 'UnsupportedFeatureError', 'NestingDepthError',
    'ConfigurationError',
]
