"""
PDF 객체 모델

PDF 값은 닫힌 10가지 타입 중 하나다:
    null, boolean, integer, real, string, name, array, dictionary, stream, reference

최상위 "N G obj ... endobj" 구문은 PDFIndirectObject로 표현한다.

- 각 타입은 write()로 PDF 텍스트 구문을 다시 출력한다
- 동등성은 dataclass가 생성하는 __eq__를 따른다.
  같은 클래스일 때만 페이로드를 비교하므로 다른 타입끼리는 항상 다르다.
- 자식 노드는 부모가 단독으로 소유한다 (파서가 상향식으로만 생성)
"""

import io
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import BinaryIO, Dict, Iterator, List, Union

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# Real 출력 유효 자릿수
REAL_PRECISION = 15


def _to_bytes(data: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(data, str):
        return data.encode('latin-1')
    return bytes(data)


def format_real(value: float) -> bytes:
    """실수를 15자리 유효숫자, 지수 없는 고정 소수점으로 변환

    항상 '.'을 포함하므로 다시 파싱해도 정수가 되지 않는다.
    유효숫자가 16자리 이상 필요한 값(0.1 + 0.2 등)은 반올림되어
    다시 파싱하면 원래 float와 같지 않다.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot serialize non-finite real: {value!r}")
    text = format(Decimal(format(value, f'.{REAL_PRECISION}g')), 'f')
    if '.' not in text:
        text += '.0'
    return text.encode('ascii')


class PDFObject:
    """모든 PDF 객체의 공통 기반"""

    def write(self, out: BinaryIO) -> None:
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.write(buf)
        return buf.getvalue()

    def __bytes__(self) -> bytes:
        return self.to_bytes()


@dataclass(frozen=True)
class PDFNull(PDFObject):
    """null"""

    def write(self, out: BinaryIO) -> None:
        out.write(b'null')


@dataclass(frozen=True)
class PDFBool(PDFObject):
    """true / false"""
    value: bool

    def write(self, out: BinaryIO) -> None:
        out.write(b'true' if self.value else b'false')


@dataclass(frozen=True)
class PDFInteger(PDFObject):
    """64비트 부호 있는 정수"""
    value: int

    def write(self, out: BinaryIO) -> None:
        out.write(str(self.value).encode('ascii'))


@dataclass(frozen=True)
class PDFReal(PDFObject):
    """실수 (정확한 비교, epsilon 없음)"""
    value: float

    def write(self, out: BinaryIO) -> None:
        out.write(format_real(self.value))


@dataclass(frozen=True)
class PDFString(PDFObject):
    """리터럴 문자열: (Hello)

    괄호 사이 바이트를 그대로 보관하고 이스케이프 없이 출력한다.
    """
    data: bytes

    def __post_init__(self):
        object.__setattr__(self, 'data', _to_bytes(self.data))

    def write(self, out: BinaryIO) -> None:
        out.write(b'(')
        out.write(self.data)
        out.write(b')')


@dataclass(frozen=True)
class PDFName(PDFObject):
    """Name: /Type

    data는 앞의 '/'를 제외한 바이트이며 다시 검증하지 않는다.
    출력할 때는 '/'를 붙여 입력 구문과 대칭을 유지한다.
    """
    data: bytes

    def __post_init__(self):
        object.__setattr__(self, 'data', _to_bytes(self.data))

    def write(self, out: BinaryIO) -> None:
        out.write(b'/')
        out.write(self.data)

    def __str__(self):
        return self.data.decode('latin-1')


@dataclass
class PDFArray(PDFObject):
    """배열: [1 2 /Name] (순서 유지)"""
    items: List['PDFValue'] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator['PDFValue']:
        return iter(self.items)

    def __getitem__(self, index: int) -> 'PDFValue':
        return self.items[index]

    def write(self, out: BinaryIO) -> None:
        out.write(b'[ ')
        for item in self.items:
            item.write(out)
            out.write(b' ')
        out.write(b']')


KeyLike = Union[str, bytes, PDFName]


def _as_name(key: KeyLike) -> PDFName:
    if isinstance(key, PDFName):
        return key
    return PDFName(key)


@dataclass
class PDFDict(PDFObject):
    """딕셔너리: << /Key value >>

    키는 Name 바이트 기준으로 유일하며, 출력 순서는 삽입 순서가 아니라
    키 바이트의 사전순이다.
    """
    entries: Dict[PDFName, 'PDFValue'] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: KeyLike) -> bool:
        return _as_name(key) in self.entries

    def __getitem__(self, key: KeyLike) -> 'PDFValue':
        return self.entries[_as_name(key)]

    def get(self, key: KeyLike, default=None):
        return self.entries.get(_as_name(key), default)

    def keys(self):
        return self.entries.keys()

    def items(self):
        return self.entries.items()

    def sorted_items(self):
        return sorted(self.entries.items(), key=lambda kv: kv[0].data)

    def write(self, out: BinaryIO) -> None:
        out.write(b'<< ')
        for key, value in self.sorted_items():
            key.write(out)
            out.write(b' ')
            value.write(out)
            out.write(b' ')
        out.write(b'>>')


@dataclass
class PDFStream(PDFObject):
    """스트림: 딕셔너리 + 바이트

    지원하는 필터가 선언된 경우 data는 디코딩된 바이트, 아니면 원본 바이트.
    """
    dict: PDFDict
    data: bytes = b''

    def write(self, out: BinaryIO) -> None:
        self.dict.write(out)
        out.write(b'\nstream\n')
        out.write(self.data)
        out.write(b'\nendstream\n')


@dataclass(frozen=True)
class PDFRef(PDFObject):
    """객체 참조 (예: 1 0 R) - 해석하지 않는 데이터"""
    obj_num: int
    gen_num: int

    def write(self, out: BinaryIO) -> None:
        out.write(f"{self.obj_num} {self.gen_num} R".encode('ascii'))

    def __repr__(self):
        return f"Ref({self.obj_num} {self.gen_num} R)"


PDFValue = Union[
    PDFNull, PDFBool, PDFInteger, PDFReal, PDFString,
    PDFName, PDFArray, PDFDict, PDFStream, PDFRef,
]


@dataclass
class PDFIndirectObject(PDFObject):
    """간접 객체: N G obj <value> endobj"""
    obj_num: int
    gen_num: int
    value: PDFValue

    def write(self, out: BinaryIO) -> None:
        out.write(f"{self.obj_num} {self.gen_num} obj\n".encode('ascii'))
        self.value.write(out)
        out.write(b'\nendobj\n')


def serialize(obj: PDFObject) -> bytes:
    """PDF 객체를 PDF 텍스트 구문으로 직렬화"""
    return obj.to_bytes()
