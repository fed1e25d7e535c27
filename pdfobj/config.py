"""파서 설정"""
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

DEFAULT_MAX_DEPTH = 128

# 중첩 한 단계는 파이썬 프레임 약 2개, 나머지는 호출자 몫
_FRAMES_PER_LEVEL = 3

ENV_MAX_DEPTH = "PDFOBJ_MAX_DEPTH"
ENV_DECODE_STREAMS = "PDFOBJ_DECODE_STREAMS"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def max_depth_limit() -> int:
    """현재 재귀 한도에서 허용되는 최대 중첩 깊이"""
    return max(DEFAULT_MAX_DEPTH, sys.getrecursionlimit() // _FRAMES_PER_LEVEL)


@dataclass
class ParserConfig:
    """파서 설정

    Attributes:
        max_depth: 배열/딕셔너리/간접 객체의 최대 중첩 깊이
        decode_streams: FlateDecode 스트림을 압축 해제할지 여부
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    decode_streams: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigurationError(f"max_depth must be an integer, got {self.max_depth!r}")
        if self.max_depth < 1:
            raise ConfigurationError(f"max_depth must be at least 1, got {self.max_depth}")
        limit = max_depth_limit()
        if self.max_depth > limit:
            raise ConfigurationError(
                f"max_depth must be at most {limit} (recursion limit {sys.getrecursionlimit()}), "
                f"got {self.max_depth}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParserConfig":
        """환경 변수에서 설정 로드

        Args:
            environ: 환경 변수 매핑 (기본값: os.environ)

        Returns:
            환경 변수 값이 반영된 ParserConfig
        """
        if environ is None:
            environ = os.environ

        max_depth = DEFAULT_MAX_DEPTH
        raw_depth = environ.get(ENV_MAX_DEPTH)
        if raw_depth:
            try:
                max_depth = int(raw_depth)
            except ValueError:
                raise ConfigurationError(f"{ENV_MAX_DEPTH} must be an integer, got {raw_depth!r}")

        decode_streams = True
        raw_decode = environ.get(ENV_DECODE_STREAMS)
        if raw_decode:
            value = raw_decode.strip().lower()
            if value in _TRUE_VALUES:
                decode_streams = True
            elif value in _FALSE_VALUES:
                decode_streams = False
            else:
                raise ConfigurationError(f"{ENV_DECODE_STREAMS} must be a boolean, got {raw_decode!r}")

        return cls(max_depth=max_depth, decode_streams=decode_streams)
