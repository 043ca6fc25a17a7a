"""Extended grapheme cluster segmentation (UAX #29)."""
from .codepoints import CodePoint, decode_code_point, decode_code_point_before, iter_code_points, to_utf16_units
from .graphemes import (
    count_graphemes,
    grapheme_spans,
    iter_graphemes,
    next_break,
    previous_break,
    split_into_graphemes,
    split_into_words,
    truncate_graphemes,
    utf16_grapheme_spans,
)
from .properties import BreakClass, BreakTable, Property, classify, get_classifier
from .rules import BreakDecision, Window, decide, should_break
from .segmenter import ClusterIterator, ClusterSpan, segment

__version__ = "0.1.0"

__all__ = [
    "BreakClass",
    "BreakDecision",
    "BreakTable",
    "ClusterIterator",
    "ClusterSpan",
    "CodePoint",
    "Property",
    "Window",
    "classify",
    "count_graphemes",
    "decide",
    "decode_code_point",
    "decode_code_point_before",
    "get_classifier",
    "grapheme_spans",
    "iter_code_points",
    "iter_graphemes",
    "next_break",
    "previous_break",
    "segment",
    "should_break",
    "split_into_graphemes",
    "split_into_words",
    "to_utf16_units",
    "truncate_graphemes",
    "utf16_grapheme_spans",
]
