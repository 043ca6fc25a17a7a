"""Code point decoding over UTF-16 code units. Pairs surrogate halves, passes lone halves through."""
from typing import Iterator, NamedTuple, Sequence

HIGH_SURROGATE_START = 0xD800
HIGH_SURROGATE_END = 0xDBFF
LOW_SURROGATE_START = 0xDC00
LOW_SURROGATE_END = 0xDFFF


class CodePoint(NamedTuple):
    value: int
    index: int
    width: int


def _unit(units: Sequence, index: int) -> int:
    unit = units[index]
    return ord(unit) if isinstance(unit, str) else unit


def _check_index(units: Sequence, index: int) -> None:
    if not 0 <= index < len(units):
        raise IndexError(f"code unit index {index} out of range for length {len(units)}")


def is_high_surrogate(unit: int) -> bool:
    return HIGH_SURROGATE_START <= unit <= HIGH_SURROGATE_END


def is_low_surrogate(unit: int) -> bool:
    return LOW_SURROGATE_START <= unit <= LOW_SURROGATE_END


def combine_surrogates(high: int, low: int) -> int:
    """Scalar value encoded by a high/low surrogate pair."""
    return (high - HIGH_SURROGATE_START) * 0x400 + (low - LOW_SURROGATE_START) + 0x10000


def is_surrogate_pair(units: Sequence, index: int) -> bool:
    """True if a high surrogate at index is immediately followed by a low surrogate."""
    if index < 0 or index + 1 >= len(units):
        return False
    return is_high_surrogate(_unit(units, index)) and is_low_surrogate(_unit(units, index + 1))


def decode_code_point(units: Sequence, index: int) -> tuple[int, int]:
    """Decode the code point starting at index. Returns (scalar, width in units)."""
    _check_index(units, index)
    if is_surrogate_pair(units, index):
        return combine_surrogates(_unit(units, index), _unit(units, index + 1)), 2
    return _unit(units, index), 1


def decode_code_point_before(units: Sequence, index: int) -> tuple[int, int]:
    """Decode the code point ending just before index. Returns (scalar, width in units)."""
    _check_index(units, index - 1)
    if index >= 2 and is_surrogate_pair(units, index - 2):
        return combine_surrogates(_unit(units, index - 2), _unit(units, index - 1)), 2
    return _unit(units, index - 1), 1


def code_point_at(units: Sequence, index: int) -> int:
    """Scalar at index. A low half of a pair resolves to the whole pair's scalar."""
    _check_index(units, index)
    if index >= 1 and is_surrogate_pair(units, index - 1):
        return combine_surrogates(_unit(units, index - 1), _unit(units, index))
    return decode_code_point(units, index)[0]


def iter_code_points(units: Sequence) -> Iterator[CodePoint]:
    """Lazily decode units front to back."""
    index = 0
    length = len(units)
    while index < length:
        value, width = decode_code_point(units, index)
        yield CodePoint(value, index, width)
        index += width


def to_utf16_units(text: str) -> list[int]:
    """UTF-16 code units of text. Lone surrogates already in text are kept as single units."""
    units = []
    for char in text:
        cp = ord(char)
        if cp > 0xFFFF:
            cp -= 0x10000
            units.append(HIGH_SURROGATE_START + (cp >> 10))
            units.append(LOW_SURROGATE_START + (cp & 0x3FF))
        else:
            units.append(cp)
    return units
