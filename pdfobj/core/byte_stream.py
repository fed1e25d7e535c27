"""
바이트 스트림 유틸리티

- bytes_till_end: 현재 위치부터 끝까지의 바이트 수 (위치 보존)
- slurp_bytes: 파일 전체를 바이트로 읽기
- inflate_stream: 현재 위치에서 정확히 length 바이트만 압축 해제
"""

import io
from typing import BinaryIO

from ..exceptions import LengthMismatchError, PDFIOError
from .stream_decoder import StreamDecoder


def bytes_till_end(stream: BinaryIO) -> int:
    """현재 위치부터 스트림 끝까지의 바이트 수. 현재 위치는 그대로 유지"""
    pos = stream.tell()
    end = stream.seek(0, io.SEEK_END)
    stream.seek(pos)
    return end - pos


def slurp_bytes(filename: str) -> bytes:
    """파일 전체를 바이트로 읽기"""
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise PDFIOError(f"Cannot read {filename}: {e}") from e


def inflate_stream(stream: BinaryIO, length: int) -> bytes:
    """
    현재 위치에서 length 바이트의 압축 데이터를 해제

    Args:
        stream: 읽기/탐색 가능한 바이트 스트림
        length: 압축된 바이트 수

    Returns:
        압축 해제된 데이터. 스트림 위치는 소비한 압축 바이트 바로 뒤.
    """
    start = stream.tell()
    available = bytes_till_end(stream)
    if length > available:
        raise LengthMismatchError(
            f"Declared length {length} exceeds {available} remaining bytes", start)

    compressed = stream.read(length)
    stream.seek(start + length)
    return StreamDecoder.decode_flate(compressed, start)
