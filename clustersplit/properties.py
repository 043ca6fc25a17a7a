"""Grapheme_Cluster_Break and Extended_Pictographic lookup for code points (UAX #29 table 2)."""
import bisect
import json
import logging
import unicodedata
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)

MAX_CODE_POINT = 0x10FFFF


class BreakClass(IntEnum):
    OTHER = 0
    CR = 1
    LF = 2
    CONTROL = 3
    EXTEND = 4
    ZWJ = 5
    REGIONAL_INDICATOR = 6
    PREPEND = 7
    SPACING_MARK = 8
    L = 9
    V = 10
    T = 11
    LV = 12
    LVT = 13


# Property value names as they appear in GraphemeBreakProperty.txt
UCD_NAMES = {
    "Other": BreakClass.OTHER,
    "CR": BreakClass.CR,
    "LF": BreakClass.LF,
    "Control": BreakClass.CONTROL,
    "Extend": BreakClass.EXTEND,
    "ZWJ": BreakClass.ZWJ,
    "Regional_Indicator": BreakClass.REGIONAL_INDICATOR,
    "Prepend": BreakClass.PREPEND,
    "SpacingMark": BreakClass.SPACING_MARK,
    "L": BreakClass.L,
    "V": BreakClass.V,
    "T": BreakClass.T,
    "LV": BreakClass.LV,
    "LVT": BreakClass.LVT,
}
UCD_NAME_OF = {v: k for k, v in UCD_NAMES.items()}


class Property(NamedTuple):
    break_class: BreakClass
    pictographic: bool = False


OTHER = Property(BreakClass.OTHER, False)


class TableError(ValueError):
    """Malformed break property table."""


class _RangeSet:
    """Sorted, non-overlapping inclusive ranges with bisect membership."""

    def __init__(self, pairs):
        pairs = sorted(pairs)
        self.starts = tuple(a for a, _ in pairs)
        self.ends = tuple(b for _, b in pairs)

    def __contains__(self, cp: int) -> bool:
        i = bisect.bisect_right(self.starts, cp) - 1
        return i >= 0 and cp <= self.ends[i]


REGIONAL_INDICATORS = (0x1F1E6, 0x1F1FF)
HANGUL_SYLLABLES = (0xAC00, 0xD7A3)
HANGUL_T_COUNT = 28

HANGUL_L = _RangeSet([(0x1100, 0x115F), (0xA960, 0xA97C)])
HANGUL_V = _RangeSet([(0x1160, 0x11A7), (0xD7B0, 0xD7C6)])
HANGUL_T = _RangeSet([(0x11A8, 0x11FF), (0xD7CB, 0xD7FB)])

# Prepended_Concatenation_Mark plus Consonant_Preceding_Repha / Consonant_Prefixed
PREPEND = _RangeSet([
    (0x0600, 0x0605), (0x06DD, 0x06DD), (0x070F, 0x070F), (0x0890, 0x0891),
    (0x08E2, 0x08E2), (0x0D4E, 0x0D4E), (0x110BD, 0x110BD), (0x110CD, 0x110CD),
    (0x111C2, 0x111C3), (0x1193F, 0x1193F), (0x11941, 0x11941), (0x11A3A, 0x11A3A),
    (0x11A84, 0x11A89), (0x11D46, 0x11D46), (0x11F02, 0x11F02),
])

OTHER_GRAPHEME_EXTEND = _RangeSet([
    (0x09BE, 0x09BE), (0x09D7, 0x09D7), (0x0B3E, 0x0B3E), (0x0B57, 0x0B57),
    (0x0BBE, 0x0BBE), (0x0BD7, 0x0BD7), (0x0CC2, 0x0CC2), (0x0CD5, 0x0CD6),
    (0x0D3E, 0x0D3E), (0x0D57, 0x0D57), (0x0DCF, 0x0DCF), (0x0DDF, 0x0DDF),
    (0x1B35, 0x1B35), (0x200C, 0x200C), (0x302E, 0x302F), (0xFF9E, 0xFF9F),
    (0x1133E, 0x1133E), (0x11357, 0x11357), (0x114B0, 0x114B0), (0x114BD, 0x114BD),
    (0x115AF, 0x115AF), (0x11930, 0x11930), (0x1D165, 0x1D165), (0x1D16E, 0x1D172),
    (0xE0020, 0xE007F),
    # Emoji_Modifier
    (0x1F3FB, 0x1F3FF),
])

SPACING_MARK_EXTRA = _RangeSet([(0x0E33, 0x0E33), (0x0EB3, 0x0EB3)])

# Spacing_Mark code points that stay Other
SPACING_MARK_EXCLUDED = _RangeSet([
    (0x102B, 0x102C), (0x1038, 0x1038), (0x1062, 0x1064), (0x1067, 0x106D),
    (0x1083, 0x1083), (0x1087, 0x108C), (0x108F, 0x108F), (0x109A, 0x109C),
    (0x1A61, 0x1A61), (0x1A63, 0x1A64), (0xAA7B, 0xAA7B), (0xAA7D, 0xAA7D),
    (0x11720, 0x11721),
])

# Unassigned Default_Ignorable_Code_Point ranges
IGNORABLE_UNASSIGNED = _RangeSet([
    (0x2065, 0x2065), (0xFFF0, 0xFFF8), (0xE0000, 0xE0000), (0xE0002, 0xE001F),
    (0xE0080, 0xE00FF), (0xE01F0, 0xE0FFF),
])

EXTENDED_PICTOGRAPHIC = _RangeSet([
    (0x00A9, 0x00A9), (0x00AE, 0x00AE), (0x203C, 0x203C), (0x2049, 0x2049),
    (0x2122, 0x2122), (0x2139, 0x2139), (0x2194, 0x2199), (0x21A9, 0x21AA),
    (0x231A, 0x231B), (0x2328, 0x2328), (0x2388, 0x2388), (0x23CF, 0x23CF),
    (0x23E9, 0x23F3), (0x23F8, 0x23FA), (0x24C2, 0x24C2), (0x25AA, 0x25AB),
    (0x25B6, 0x25B6), (0x25C0, 0x25C0), (0x25FB, 0x25FE), (0x2600, 0x2605),
    (0x2607, 0x2612), (0x2614, 0x2685), (0x2690, 0x2705), (0x2708, 0x2712),
    (0x2714, 0x2714), (0x2716, 0x2716), (0x271D, 0x271D), (0x2721, 0x2721),
    (0x2728, 0x2728), (0x2733, 0x2734), (0x2744, 0x2744), (0x2747, 0x2747),
    (0x274C, 0x274C), (0x274E, 0x274E), (0x2753, 0x2755), (0x2757, 0x2757),
    (0x2763, 0x2767), (0x2795, 0x2797), (0x27A1, 0x27A1), (0x27B0, 0x27B0),
    (0x27BF, 0x27BF), (0x2934, 0x2935), (0x2B05, 0x2B07), (0x2B1B, 0x2B1C),
    (0x2B50, 0x2B50), (0x2B55, 0x2B55), (0x3030, 0x3030), (0x303D, 0x303D),
    (0x3297, 0x3297), (0x3299, 0x3299), (0x1F000, 0x1F0FF), (0x1F10D, 0x1F10F),
    (0x1F12F, 0x1F12F), (0x1F16C, 0x1F171), (0x1F17E, 0x1F17F), (0x1F18E, 0x1F18E),
    (0x1F191, 0x1F19A), (0x1F1AD, 0x1F1E5), (0x1F201, 0x1F20F), (0x1F21A, 0x1F21A),
    (0x1F22F, 0x1F22F), (0x1F232, 0x1F23A), (0x1F23C, 0x1F23F), (0x1F249, 0x1F3FA),
    (0x1F400, 0x1F53D), (0x1F546, 0x1F64F), (0x1F680, 0x1F6FF), (0x1F774, 0x1F77F),
    (0x1F7D5, 0x1F7FF), (0x1F80C, 0x1F80F), (0x1F848, 0x1F84F), (0x1F85A, 0x1F85F),
    (0x1F888, 0x1F88F), (0x1F8AE, 0x1F8FF), (0x1F90C, 0x1F93A), (0x1F93C, 0x1F945),
    (0x1F947, 0x1FAFF), (0x1FC00, 0x1FFFD),
])


def is_extended_pictographic(cp: int) -> bool:
    return cp in EXTENDED_PICTOGRAPHIC


def derive_break_class(cp: int) -> BreakClass:
    """Grapheme_Cluster_Break of cp from the unicodedata general category plus the fixed exception tables."""
    if cp == 0x0D:
        return BreakClass.CR
    if cp == 0x0A:
        return BreakClass.LF
    if cp == 0x200D:
        return BreakClass.ZWJ
    if REGIONAL_INDICATORS[0] <= cp <= REGIONAL_INDICATORS[1]:
        return BreakClass.REGIONAL_INDICATOR
    if cp in PREPEND:
        return BreakClass.PREPEND
    if cp in HANGUL_L:
        return BreakClass.L
    if cp in HANGUL_V:
        return BreakClass.V
    if cp in HANGUL_T:
        return BreakClass.T
    if HANGUL_SYLLABLES[0] <= cp <= HANGUL_SYLLABLES[1]:
        if (cp - HANGUL_SYLLABLES[0]) % HANGUL_T_COUNT == 0:
            return BreakClass.LV
        return BreakClass.LVT
    if cp in OTHER_GRAPHEME_EXTEND:
        return BreakClass.EXTEND
    if cp in SPACING_MARK_EXTRA:
        return BreakClass.SPACING_MARK
    if cp in SPACING_MARK_EXCLUDED:
        return BreakClass.OTHER

    category = unicodedata.category(chr(cp))
    if category in ("Mn", "Me"):
        return BreakClass.EXTEND
    if category == "Mc":
        return BreakClass.SPACING_MARK
    if category in ("Cc", "Cf", "Cs", "Zl", "Zp"):
        return BreakClass.CONTROL
    if category == "Cn" and cp in IGNORABLE_UNASSIGNED:
        return BreakClass.CONTROL
    return BreakClass.OTHER


class UnicodeDataClassifier:
    """Classifier backed by the interpreter's unicodedata module."""

    unicode_version = unicodedata.unidata_version

    def classify(self, cp: int) -> Property:
        return _derive_property(cp)


@lru_cache(maxsize=8192)
def _derive_property(cp: int) -> Property:
    if not 0 <= cp <= MAX_CODE_POINT:
        return OTHER
    return Property(derive_break_class(cp), is_extended_pictographic(cp))


class BreakTable:
    """Immutable range table built from GraphemeBreakProperty.txt and emoji-data.txt."""

    def __init__(self, break_ranges, pictographic_ranges, unicode_version: str = ""):
        ranges = sorted((int(a), int(b), BreakClass(c)) for a, b, c in break_ranges)
        for (a1, b1, _), (a2, _, _) in zip(ranges, ranges[1:]):
            if a2 <= b1:
                raise TableError(f"overlapping ranges at U+{a1:04X}..U+{b1:04X} and U+{a2:04X}")
        self._starts = tuple(r[0] for r in ranges)
        self._ends = tuple(r[1] for r in ranges)
        self._classes = tuple(r[2] for r in ranges)
        self._pictographic = _RangeSet((int(a), int(b)) for a, b in pictographic_ranges)
        self.unicode_version = unicode_version

    def __len__(self) -> int:
        return len(self._starts)

    def break_class(self, cp: int) -> BreakClass:
        i = bisect.bisect_right(self._starts, cp) - 1
        if i >= 0 and cp <= self._ends[i]:
            return self._classes[i]
        return BreakClass.OTHER

    def classify(self, cp: int) -> Property:
        return Property(self.break_class(cp), cp in self._pictographic)

    def to_dict(self) -> dict:
        return {
            "unicode_version": self.unicode_version,
            "grapheme_break": [
                [a, b, UCD_NAME_OF[c]] for a, b, c in zip(self._starts, self._ends, self._classes)
            ],
            "extended_pictographic": [
                [a, b] for a, b in zip(self._pictographic.starts, self._pictographic.ends)
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BreakTable":
        try:
            break_ranges = [(a, b, UCD_NAMES[name]) for a, b, name in data["grapheme_break"]]
            pictographic = [(a, b) for a, b in data.get("extended_pictographic", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise TableError(f"invalid break table: {e}") from e
        return cls(break_ranges, pictographic, data.get("unicode_version", ""))

    @classmethod
    def load(cls, path) -> "BreakTable":
        """Load a table written by clustersplit.ucd.write_table."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise TableError(f"{path}: {e}") from e
        table = cls.from_dict(data)
        logger.info("Loaded %d break ranges (Unicode %s) from %s", len(table), table.unicode_version or "?", path)
        return table


DEFAULT_CLASSIFIER = UnicodeDataClassifier()


@lru_cache(maxsize=None)
def _load_table(path: str) -> BreakTable:
    return BreakTable.load(path)


def get_classifier(config: dict | None = None):
    """Classifier for config: a BreakTable when table_path is set, else the unicodedata one."""
    table_path = (config or {}).get("table_path")
    if table_path:
        return _load_table(str(Path(table_path).resolve()))
    return DEFAULT_CLASSIFIER


def classify(cp: int) -> Property:
    """(break class, is Extended_Pictographic) for cp using the default classifier."""
    return DEFAULT_CLASSIFIER.classify(cp)
