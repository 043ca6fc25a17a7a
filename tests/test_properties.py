"""Tests for break property classification."""
import pytest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from clustersplit.properties import (
    DEFAULT_CLASSIFIER,
    BreakClass,
    BreakTable,
    Property,
    TableError,
    classify,
    derive_break_class,
    get_classifier,
    is_extended_pictographic,
)


@pytest.mark.parametrize(
    "cp, expected",
    [
        (0x0061, BreakClass.OTHER),
        (0x000D, BreakClass.CR),
        (0x000A, BreakClass.LF),
        (0x0000, BreakClass.CONTROL),
        (0x00AD, BreakClass.CONTROL),
        (0x2028, BreakClass.CONTROL),
        (0xD800, BreakClass.CONTROL),
        (0x0301, BreakClass.EXTEND),
        (0xFE0F, BreakClass.EXTEND),
        (0x200C, BreakClass.EXTEND),
        (0x1F3FB, BreakClass.EXTEND),
        (0xE0061, BreakClass.EXTEND),
        (0x200D, BreakClass.ZWJ),
        (0x1F1E6, BreakClass.REGIONAL_INDICATOR),
        (0x1F1FF, BreakClass.REGIONAL_INDICATOR),
        (0x0600, BreakClass.PREPEND),
        (0x0D4E, BreakClass.PREPEND),
        (0x0903, BreakClass.SPACING_MARK),
        (0x0E33, BreakClass.SPACING_MARK),
        (0x102B, BreakClass.OTHER),
        (0x1100, BreakClass.L),
        (0xA960, BreakClass.L),
        (0x1161, BreakClass.V),
        (0x11A8, BreakClass.T),
        (0xAC00, BreakClass.LV),
        (0xAC01, BreakClass.LVT),
        (0xAC1C, BreakClass.LV),
        (0xD7A3, BreakClass.LVT),
    ],
)
def test_derive_break_class(cp, expected):
    assert derive_break_class(cp) is expected


def test_extended_pictographic():
    assert is_extended_pictographic(0x1F600) is True
    assert is_extended_pictographic(0x00A9) is True
    assert is_extended_pictographic(0x2764) is True
    assert is_extended_pictographic(0x0041) is False
    # skin tones and regional indicators are not pictographic
    assert is_extended_pictographic(0x1F3FB) is False
    assert is_extended_pictographic(0x1F1E6) is False


def test_classify_is_total():
    assert classify(0x1F600) == Property(BreakClass.OTHER, True)
    assert classify(0x61) == Property(BreakClass.OTHER, False)
    assert classify(0x110000) == Property(BreakClass.OTHER, False)
    assert classify(-1) == Property(BreakClass.OTHER, False)


def test_classify_deterministic():
    assert [classify(cp) for cp in range(0x300, 0x400)] == [classify(cp) for cp in range(0x300, 0x400)]


@pytest.fixture
def small_table():
    return BreakTable(
        [
            (0x0A, 0x0A, BreakClass.LF),
            (0x0D, 0x0D, BreakClass.CR),
            (0x0300, 0x036F, BreakClass.EXTEND),
            (0x200D, 0x200D, BreakClass.ZWJ),
        ],
        [(0x1F600, 0x1F64F)],
        "test",
    )


def test_break_table_lookup(small_table):
    assert len(small_table) == 4
    assert small_table.break_class(0x0A) is BreakClass.LF
    assert small_table.break_class(0x0301) is BreakClass.EXTEND
    assert small_table.break_class(0x036F) is BreakClass.EXTEND
    assert small_table.break_class(0x0370) is BreakClass.OTHER
    assert small_table.break_class(0x09) is BreakClass.OTHER
    assert small_table.classify(0x1F600) == Property(BreakClass.OTHER, True)
    assert small_table.classify(0x1F650) == Property(BreakClass.OTHER, False)


def test_break_table_dict_roundtrip(small_table):
    data = small_table.to_dict()
    assert data["grapheme_break"][0] == [0x0A, 0x0A, "LF"]
    assert data["extended_pictographic"] == [[0x1F600, 0x1F64F]]
    again = BreakTable.from_dict(data)
    assert again.to_dict() == data
    assert again.unicode_version == "test"


def test_break_table_rejects_overlap():
    with pytest.raises(TableError):
        BreakTable([(0x300, 0x36F, BreakClass.EXTEND), (0x360, 0x370, BreakClass.OTHER)], [])


def test_break_table_rejects_unknown_class():
    with pytest.raises(TableError):
        BreakTable.from_dict({"grapheme_break": [[1, 2, "Bogus"]]})
    with pytest.raises(TableError):
        BreakTable.from_dict({})


def test_break_table_load(tmp_path):
    path = tmp_path / "table.json"
    path.write_text('{"unicode_version": "x", "grapheme_break": [[13, 13, "CR"]]}', encoding="utf-8")
    table = BreakTable.load(path)
    assert table.break_class(13) is BreakClass.CR
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(TableError):
        BreakTable.load(bad)
    with pytest.raises(FileNotFoundError):
        BreakTable.load(tmp_path / "missing.json")


def test_get_classifier(tmp_path):
    assert get_classifier() is DEFAULT_CLASSIFIER
    assert get_classifier({"table_path": None}) is DEFAULT_CLASSIFIER
    path = tmp_path / "table.json"
    path.write_text('{"grapheme_break": [[10, 10, "LF"]]}', encoding="utf-8")
    first = get_classifier({"table_path": str(path)})
    assert isinstance(first, BreakTable)
    assert get_classifier({"table_path": path}) is first
