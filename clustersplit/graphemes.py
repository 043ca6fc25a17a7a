"""Grapheme cluster utilities. Split, count, measure and truncate text without tearing clusters."""
import unicodedata
from typing import Iterator, Sequence

from clustersplit.codepoints import to_utf16_units
from clustersplit.segmenter import ClusterSpan, segment


def grapheme_spans(text: Sequence, classifier=None) -> list[ClusterSpan]:
    """All cluster spans of text, in order."""
    return list(segment(text, classifier))


def iter_graphemes(text: Sequence, classifier=None) -> Iterator:
    """Yield each cluster as a slice of text."""
    for span in segment(text, classifier):
        yield text[span.start:span.end]


def split_into_graphemes(text: Sequence, classifier=None) -> list:
    """Split text into extended grapheme clusters."""
    if not text:
        return []
    return list(iter_graphemes(text, classifier))


def count_graphemes(text: Sequence, classifier=None) -> int:
    """Number of user-perceived characters in text."""
    return sum(1 for _ in segment(text, classifier))


def next_break(text: Sequence, index: int, classifier=None) -> int:
    """First cluster boundary strictly after index."""
    if index < 0:
        return 0
    for span in segment(text, classifier):
        if span.end > index:
            return span.end
    return len(text)


def previous_break(text: Sequence, index: int, classifier=None) -> int:
    """Last cluster boundary strictly before index."""
    if index > len(text):
        return len(text)
    boundary = 0
    for span in segment(text, classifier):
        if span.start >= index:
            break
        boundary = span.start
    return boundary


def truncate_graphemes(text: Sequence, limit: int, ellipsis: str = "", classifier=None):
    """Keep at most limit clusters of text. ellipsis is appended only when something was cut."""
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    end = 0
    for i, span in enumerate(segment(text, classifier)):
        if i == limit:
            return text[:end] + ellipsis if ellipsis else text[:end]
        end = span.end
    return text


def split_into_words(text: str, classifier=None) -> list[str]:
    """Split into words preserving grapheme boundaries. Uses whitespace and punctuation."""
    if not text:
        return []
    words = []
    current = []
    for g in iter_graphemes(text, classifier):
        if g.isspace() or unicodedata.category(g[0]).startswith("P"):
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(g)
    if current:
        words.append("".join(current))
    return words


def utf16_grapheme_spans(text: str, classifier=None) -> list[ClusterSpan]:
    """Cluster spans measured in UTF-16 code units, as JavaScript string offsets count them."""
    return grapheme_spans(to_utf16_units(text), classifier)
