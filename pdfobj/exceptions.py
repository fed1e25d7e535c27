"""
pdfobj 예외 정의

파싱 실패는 모두 PDFError 하위 클래스로 전달된다.
토큰 단위 파싱(parse_int, parse_double)은 예외 대신 None을 반환한다.
"""
from typing import Optional


class PDFError(Exception):
    """pdfobj 모든 오류의 기반 클래스"""

    def __init__(self, msg: str, pos: Optional[int] = None):
        self.msg = msg
        self.pos = pos  # 오류가 발생한 바이트 오프셋
        if pos is not None:
            super().__init__(f"{msg} at offset {pos}")
        else:
            super().__init__(msg)


class PDFIOError(PDFError):
    """스트림/파일을 읽을 수 없음"""
    pass


class PDFSyntaxError(PDFError, ValueError):
    """예상치 못한 바이트, 닫히지 않은 구분자, 필수 키워드 누락"""
    pass


class LengthMismatchError(PDFSyntaxError):
    """/Length 값이 남은 바이트를 넘거나 endstream과 맞지 않음"""
    pass


class DecompressionError(PDFError):
    """압축 데이터가 손상됨"""
    pass


class UnsupportedFeatureError(PDFError, NotImplementedError):
    """간접 /Length, 16진수 문자열, 이스케이프, 주석 등 미지원 구문"""
    pass


class NestingDepthError(PDFError):
    """중첩 깊이가 설정된 최대값을 초과함"""

    def __init__(self, depth: int, max_depth: int, pos: Optional[int] = None):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"Nesting depth {depth} exceeds maximum of {max_depth}", pos)


class ConfigurationError(PDFError, ValueError):
    """잘못된 설정값"""
    pass
