"""
스트림 필터 디코딩

지원하는 필터:
1. FlateDecode (zlib)

그 외 필터가 선언된 스트림은 원본 바이트를 그대로 둔다.
필터 배열인 경우 첫 번째 항목만 본다.
"""

import zlib
from typing import Optional

from ..exceptions import DecompressionError
from .objects import PDFArray, PDFName


class StreamDecoder:
    """PDF 스트림 디코더"""

    FLATE = b'FlateDecode'
    SUPPORTED = (FLATE,)

    @staticmethod
    def filter_name(filter_value) -> Optional[bytes]:
        """/Filter 값에서 적용할 필터 이름 추출 (직접 Name 또는 배열의 첫 항목)"""
        if isinstance(filter_value, PDFArray) and len(filter_value) > 0:
            filter_value = filter_value[0]
        if isinstance(filter_value, PDFName):
            return filter_value.data
        return None

    @staticmethod
    def is_supported(name: Optional[bytes]) -> bool:
        return name in StreamDecoder.SUPPORTED

    @staticmethod
    def decode_flate(data: bytes, pos: Optional[int] = None) -> bytes:
        """FlateDecode (zlib) 압축 해제"""
        try:
            return zlib.decompress(data)
        except zlib.error:
            pass

        # 일부 PDF는 헤더 없이 raw deflate 사용
        try:
            return zlib.decompress(data, -15)
        except zlib.error as e:
            raise DecompressionError(f"Malformed FlateDecode data: {e}", pos) from e
