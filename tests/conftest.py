"""
pytest 설정과 공용 fixture
"""

import zlib
from dataclasses import dataclass
from typing import Callable

import pytest

from pdfobj import ParserConfig, PDFParser

PLAINTEXT = b"BT\n/F1 24 Tf\n100 700 Td\n(Hello PDF!) Tj\nET"


@dataclass(frozen=True)
class StreamFixture:
    """압축 스트림 테스트 데이터"""
    plaintext: bytes
    compressed: bytes
    source: bytes  # "<< ... >>\nstream\n...\nendstream" 전체


def build_stream(dict_body: bytes, payload: bytes, eol: bytes = b"\n") -> bytes:
    return b"<< " + dict_body + b" >>\nstream" + eol + payload + b"\nendstream"


@pytest.fixture
def make_parser() -> Callable[..., PDFParser]:
    """바이트에서 파서 생성"""
    def _make(data: bytes, **config) -> PDFParser:
        return PDFParser(data, ParserConfig(**config))
    return _make


@pytest.fixture
def flate_stream() -> StreamFixture:
    """FlateDecode 스트림과 기대 평문"""
    compressed = zlib.compress(PLAINTEXT)
    body = b"/Filter /FlateDecode /Length " + str(len(compressed)).encode()
    return StreamFixture(PLAINTEXT, compressed, build_stream(body, compressed))


@pytest.fixture
def sample_object_file(tmp_path, flate_stream):
    """간접 객체 여러 개가 들어있는 파일"""
    content = (
        b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n"
        b"2 0 obj\n<< /Type /Pages /Kids [3 0 R] /Count 1 >>\nendobj\n"
        b"4 0 obj\n" + flate_stream.source + b"\nendobj\n"
    )
    path = tmp_path / "objects.txt"
    path.write_bytes(content)
    return path
