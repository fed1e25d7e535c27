"""
PDF Object Core Module
"""
from .objects import (
    PDFObject, PDFValue,
    PDFNull, PDFBool, PDFInteger, PDFReal, PDFString, PDFName,
    PDFArray, PDFDict, PDFStream, PDFRef, PDFIndirectObject,
    serialize
)
from .lexer import PDFLexer, WHITESPACE, DELIMITERS, is_whitespace, valid_name_char, ends_name
from .parser import PDFParser, parse, parse_file
from .stream_decoder import StreamDecoder
from .byte_stream import bytes_till_end, slurp_bytes, inflate_stream

__all__ = [
    # Objects
    'PDFObject', 'PDFValue',
    'PDFNull', 'PDFBool', 'PDFInteger', 'PDFReal', 'PDFString', 'PDFName',
    'PDFArray', 'PDFDict', 'PDFStream', 'PDFRef', 'PDFIndirectObject',
    'serialize',
    # Lexer
    'PDFLexer', 'WHITESPACE', 'DELIMITERS', 'is_whitespace', 'valid_name_char', 'ends_name',
    # Parser
    'PDFParser', 'parse', 'parse_file',
    # Streams
    'StreamDecoder', 'bytes_till_end', 'slurp_bytes', 'inflate_stream',
]
