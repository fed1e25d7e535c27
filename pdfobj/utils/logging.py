"""pdfobj 로깅 설정"""
import logging
import sys
from typing import List, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

PACKAGE_LOGGER = "pdfobj"


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """pdfobj 패키지 로거 설정

    루트 로거는 건드리지 않고 패키지 로거에 핸들러를 붙인다.
    다시 호출하면 이전에 붙인 핸들러를 닫고 교체한다.
    표준 출력은 직렬화 결과에 쓰이므로 로그는 stderr로 보낸다.

    Args:
        level: 로그 레벨 (logging.INFO, logging.DEBUG 등)
        format_string: 로그 메시지 포맷
        log_file: 로그를 함께 기록할 파일 경로

    Returns:
        설정된 패키지 로거
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logger = logging.getLogger(PACKAGE_LOGGER)
    reset_logging()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def reset_logging() -> None:
    """setup_logging이 붙인 핸들러 제거 (NullHandler는 유지)"""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            continue
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def get_logger(name: str) -> logging.Logger:
    """모듈별 로거 반환 (보통 __name__)"""
    return logging.getLogger(name)
