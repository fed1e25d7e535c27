"""pdfobj 유틸리티"""
from .logging import setup_logging, reset_logging, get_logger

__all__ = ['setup_logging', 'reset_logging', 'get_logger']
