"""
재귀 하강 파서 테스트

숫자/참조/간접 객체 모호성 해결, 복합 타입, 오류 처리, 중첩 깊이 제한
"""

import io

import pytest

from pdfobj import (
    NestingDepthError, PDFArray, PDFBool, PDFDict, PDFIndirectObject, PDFInteger,
    PDFName, PDFNull, PDFParser, PDFReal, PDFRef, PDFString, PDFSyntaxError,
    ParserConfig, UnsupportedFeatureError, parse, parse_file, serialize
)
from pdfobj.config import max_depth_limit


# -- 모호성 해결 -----------------------------------------------------------

def test_indirect_object() -> None:
    assert parse(b"5 0 obj null endobj") == PDFIndirectObject(5, 0, PDFNull())


def test_reference() -> None:
    assert parse(b"5 0 R") == PDFRef(5, 0)


@pytest.mark.parametrize("data", [b"5", b"5 ", b"5]", b"5 /Name", b"5 0", b"5 0 /Name", b"5 0 5"])
def test_plain_integer(data: bytes) -> None:
    assert parse(data) == PDFInteger(5)


def test_backtracking_restores_cursor_after_integer() -> None:
    """확장 구문이 아니면 첫 정수 바로 뒤로 복원"""
    parser = PDFParser(b"5 0 /Name")
    assert parser.parse_pdf_obj() == PDFInteger(5)
    assert parser.lexer.tell() == 1
    assert parser.parse_pdf_obj() == PDFInteger(0)
    assert parser.parse_pdf_obj() == PDFName("Name")


def test_reference_consumes_r() -> None:
    parser = PDFParser(b"12 3 R/Next")
    assert parser.parse_pdf_obj() == PDFRef(12, 3)
    assert parser.lexer.peek() == b"/"


def test_real_is_never_a_reference() -> None:
    parser = PDFParser(b"1.5 0 R")
    assert parser.parse_pdf_obj() == PDFReal(1.5)
    assert parser.lexer.tell() == 3


def test_array_of_references_and_numbers() -> None:
    assert parse(b"[1 0 R 2 3 4 0 R]") == PDFArray([
        PDFRef(1, 0), PDFInteger(2), PDFInteger(3), PDFRef(4, 0),
    ])


def test_missing_endobj_is_syntax_error() -> None:
    with pytest.raises(PDFSyntaxError):
        parse(b"5 0 obj null")


def test_indirect_object_not_allowed_inside_array() -> None:
    with pytest.raises(PDFSyntaxError):
        parse(b"[5 0 obj null endobj]")


def test_parse_top_level_obj() -> None:
    parser = PDFParser(b"\n 7 1 obj\n<< /Type /Page >>\nendobj\n")
    obj = parser.parse_top_level_obj()
    assert obj == PDFIndirectObject(7, 1, PDFDict({PDFName("Type"): PDFName("Page")}))


def test_parse_top_level_obj_rejects_plain_value() -> None:
    with pytest.raises(PDFSyntaxError):
        PDFParser(b"7 1 R").parse_top_level_obj()


# -- 숫자 ------------------------------------------------------------------

@pytest.mark.parametrize(
    "data,expected",
    [
        (b"-3.14", PDFReal(-3.14)),
        (b"+7", PDFInteger(7)),
        (b".5", PDFReal(0.5)),
        (b"-.002", PDFReal(-0.002)),
        (b"0", PDFInteger(0)),
        (b"-17", PDFInteger(-17)),
        (b"9223372036854775807", PDFInteger(9223372036854775807)),
        (b"9223372036854775808", PDFReal(9223372036854775808.0)),
    ],
)
def test_numeric_forms(data: bytes, expected) -> None:
    assert parse(data) == expected


@pytest.mark.parametrize("data", [b"-", b"+", b".", b"1.2.3", b"--5"])
def test_invalid_number_is_syntax_error(data: bytes) -> None:
    with pytest.raises(PDFSyntaxError):
        parse(data)


# -- 단순 타입 -------------------------------------------------------------

@pytest.mark.parametrize(
    "data,expected",
    [
        (b"null", PDFNull()),
        (b"true", PDFBool(True)),
        (b"false", PDFBool(False)),
        (b"  \n/Type", PDFName("Type")),
        (b"/", PDFName("")),
        (b"(Hello World)", PDFString(b"Hello World")),
        (b"(a (b (c)) d)", PDFString(b"a (b (c)) d")),
        (b"()", PDFString(b"")),
    ],
)
def test_simple_values(data: bytes, expected) -> None:
    assert parse(data) == expected


def test_name_token_not_consuming_delimiter() -> None:
    parser = PDFParser(b"/A/B")
    assert parser.parse_pdf_obj() == PDFName("A")
    assert parser.parse_pdf_obj() == PDFName("B")


@pytest.mark.parametrize("data", [b"nul", b"True", b"R", b"obj", b"]", b">>", b")", b"{"])
def test_unexpected_tokens(data: bytes) -> None:
    with pytest.raises(PDFSyntaxError):
        parse(data)


def test_empty_input() -> None:
    with pytest.raises(PDFSyntaxError):
        parse(b"   ")


def test_unterminated_string() -> None:
    with pytest.raises(PDFSyntaxError):
        parse(b"(abc (def)")


@pytest.mark.parametrize("data", [b"<48656C6C6F>", b"(a\\)b)", b"% comment\nnull"])
def test_unsupported_syntax(data: bytes) -> None:
    with pytest.raises(UnsupportedFeatureError):
        parse(data)


# -- 배열 / 딕셔너리 -------------------------------------------------------

def test_array() -> None:
    assert parse(b"[ 1 2.5 /N (s) [true] << /K null >> ]") == PDFArray([
        PDFInteger(1), PDFReal(2.5), PDFName("N"), PDFString(b"s"),
        PDFArray([PDFBool(True)]),
        PDFDict({PDFName("K"): PDFNull()}),
    ])


def test_array_without_spaces() -> None:
    assert parse(b"[/A/B[1]]") == PDFArray([PDFName("A"), PDFName("B"), PDFArray([PDFInteger(1)])])


def test_unterminated_array() -> None:
    with pytest.raises(PDFSyntaxError):
        parse(b"[1 2")


def test_dict() -> None:
    d = parse(b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>")
    assert isinstance(d, PDFDict)
    assert d["Type"] == PDFName("Pages")
    assert d["Kids"] == PDFArray([PDFRef(3, 0)])
    assert d["Count"] == PDFInteger(1)


def test_duplicate_dict_key_last_wins() -> None:
    d = parse(b"<< /A 1 /A 2 >>")
    assert d == PDFDict({PDFName("A"): PDFInteger(2)})
    assert len(d) == 1


def test_nested_dict_without_spaces() -> None:
    d = parse(b"<</Font<</F1 5 0 R>>/Size 12>>")
    assert d == PDFDict({
        PDFName("Font"): PDFDict({PDFName("F1"): PDFRef(5, 0)}),
        PDFName("Size"): PDFInteger(12),
    })


@pytest.mark.parametrize("data", [b"<< 1 2 >>", b"<< /A 1", b"<< /A >>", b"<< /A 1 >"])
def test_malformed_dict(data: bytes) -> None:
    with pytest.raises(PDFSyntaxError):
        parse(data)


def test_dict_without_stream_restores_cursor() -> None:
    parser = PDFParser(b"<< /A 1 >>  \n/Next")
    parser.parse_pdf_obj()
    assert parser.lexer.tell() == 10


def test_failed_parse_returns_nothing_partial() -> None:
    parser = PDFParser(b"[1 2 << /A (x) ]")
    with pytest.raises(PDFSyntaxError):
        parser.parse_pdf_obj()


# -- 중첩 깊이 -------------------------------------------------------------

def test_adversarial_nesting_fails_with_structured_error() -> None:
    with pytest.raises(NestingDepthError) as exc_info:
        parse(b"[" * 100000)
    assert exc_info.value.max_depth == 128


def test_nesting_limit_is_configurable(make_parser) -> None:
    assert make_parser(b"[[[1]]]", max_depth=3).parse_pdf_obj() == PDFArray([
        PDFArray([PDFArray([PDFInteger(1)])]),
    ])
    with pytest.raises(NestingDepthError):
        make_parser(b"[[[[1]]]]", max_depth=3).parse_pdf_obj()


def test_nesting_counts_dicts_and_indirect_objects(make_parser) -> None:
    with pytest.raises(NestingDepthError):
        make_parser(b"1 0 obj << /A [1] >> endobj", max_depth=2).parse_pdf_obj()
    obj = make_parser(b"1 0 obj << /A 1 >> endobj", max_depth=2).parse_pdf_obj()
    assert isinstance(obj, PDFIndirectObject)


def test_parser_recovers_depth_after_error(make_parser) -> None:
    parser = make_parser(b"[[[[1]]]] [1]", max_depth=3)
    with pytest.raises(NestingDepthError):
        parser.parse_pdf_obj()
    assert parser._depth == 0


def test_nesting_past_recursion_limit_is_structured_error() -> None:
    config = ParserConfig()
    config.max_depth = 100000  # 검증을 거치지 않은 값
    parser = PDFParser(b"[" * 100000 + b" [1]", config)
    with pytest.raises(NestingDepthError) as exc_info:
        parser.parse_pdf_obj()
    assert exc_info.value.max_depth == 100000
    assert parser._depth == 0


def test_deepest_allowed_nesting_parses() -> None:
    depth = max_depth_limit()
    data = b"[" * depth + b"1" + b"]" * depth
    value = parse(data, ParserConfig(max_depth=depth))
    for _ in range(depth):
        assert isinstance(value, PDFArray)
        value = value[0]
    assert value == PDFInteger(1)


# -- 왕복 ------------------------------------------------------------------

ROUND_TRIP_VALUES = [
    PDFNull(),
    PDFBool(False),
    PDFInteger(-9223372036854775808),
    PDFReal(5.0),
    PDFReal(-0.125),
    PDFReal(123456.789),
    PDFString(b"text (with) parens"),
    PDFName("A;B.C-D"),
    PDFRef(10, 2),
    PDFArray([]),
    PDFDict(),
    PDFArray([PDFInteger(1), PDFReal(1.0), PDFRef(1, 0), PDFArray([PDFNull()])]),
    PDFDict({
        PDFName("Type"): PDFName("Annot"),
        PDFName("Rect"): PDFArray([PDFReal(0.5), PDFInteger(0), PDFInteger(612), PDFInteger(792)]),
        PDFName("Parent"): PDFRef(3, 0),
        PDFName("Nested"): PDFDict({PDFName("Flag"): PDFBool(True)}),
    }),
    PDFIndirectObject(4, 0, PDFArray([PDFString(b"x")])),
]


@pytest.mark.parametrize("value", ROUND_TRIP_VALUES)
def test_round_trip(value) -> None:
    assert parse(serialize(value)) == value


def test_real_round_trip_keeps_15_significant_digits() -> None:
    # 15자리를 넘는 정밀도는 직렬화에서 반올림된다
    value = PDFReal(0.1 + 0.2)
    reparsed = parse(serialize(value))
    assert reparsed == PDFReal(0.3)
    assert reparsed != value
    assert parse(serialize(PDFReal(0.123456789012345))) == PDFReal(0.123456789012345)


# -- 스트림 입력 / 파일 ----------------------------------------------------

def test_parse_from_binary_stream() -> None:
    stream = io.BytesIO(b"xxxx<< /A 1 >>")
    stream.seek(4)
    assert parse(stream) == PDFDict({PDFName("A"): PDFInteger(1)})


def test_iter_objects() -> None:
    parser = PDFParser(b"1 0 obj 1 endobj\n2 0 obj (two) endobj\n 3 ")
    assert list(parser.iter_objects()) == [
        PDFIndirectObject(1, 0, PDFInteger(1)),
        PDFIndirectObject(2, 0, PDFString(b"two")),
        PDFInteger(3),
    ]


def test_parse_file_at_offset(sample_object_file) -> None:
    content = sample_object_file.read_bytes()
    offset = content.index(b"2 0 obj")
    obj = parse_file(str(sample_object_file), offset=offset)
    assert obj.obj_num == 2
    assert obj.value["Kids"] == PDFArray([PDFRef(3, 0)])
