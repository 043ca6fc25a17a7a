"""Build break property tables from the Unicode Character Database files.

GraphemeBreakProperty.txt and emoji-data.txt are fetched from unicode.org,
parsed into ranges and written as JSON for BreakTable.load. GraphemeBreakTest.txt
is parsed into (code points, expected clusters) cases for conformance checks.
"""
import json
import logging
from pathlib import Path

import regex
import requests

from clustersplit.properties import UCD_NAMES, BreakTable

logger = logging.getLogger(__name__)

UCD_BASE_URL = "https://www.unicode.org/Public/{version}/ucd/{subdir}/{name}"
UCD_SUBDIRS = {
    "GraphemeBreakProperty.txt": "auxiliary",
    "GraphemeBreakTest.txt": "auxiliary",
    "emoji-data.txt": "emoji",
}

# 1F1E6..1F1FF  ; Regional_Indicator # So  [26] ...
LINE_RE = regex.compile(
    r"^\s*(?P<first>[0-9A-Fa-f]{4,6})(?:\.\.(?P<last>[0-9A-Fa-f]{4,6}))?\s*;\s*(?P<value>[\p{L}\p{N}_]+)"
)
TEST_TOKEN_RE = regex.compile(r"[÷×]|[0-9A-Fa-f]{4,6}")


def parse_property_ranges(text: str, wanted=None) -> list[tuple[int, int, str]]:
    """Sorted (first, last, value) ranges from a UCD property file; comments and blanks skipped."""
    ranges = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0]
        if not line.strip():
            continue
        m = LINE_RE.match(line)
        if m is None:
            raise ValueError(f"unparseable UCD line: {raw!r}")
        value = m.group("value")
        if wanted is not None and value not in wanted:
            continue
        first = int(m.group("first"), 16)
        last = int(m.group("last") or m.group("first"), 16)
        ranges.append((first, last, value))
    ranges.sort()
    return ranges


def merge_ranges(ranges):
    """Coalesce adjacent ranges carrying the same value."""
    merged = []
    for first, last, value in ranges:
        if merged and merged[-1][2] == value and merged[-1][1] + 1 == first:
            merged[-1] = (merged[-1][0], last, value)
        else:
            merged.append((first, last, value))
    return merged


def build_table(break_text: str, emoji_text: str, unicode_version: str = "") -> BreakTable:
    """BreakTable from the text of GraphemeBreakProperty.txt and emoji-data.txt."""
    breaks = merge_ranges(parse_property_ranges(break_text, wanted=UCD_NAMES))
    pictographic = merge_ranges(parse_property_ranges(emoji_text, wanted={"Extended_Pictographic"}))
    return BreakTable(
        [(a, b, UCD_NAMES[v]) for a, b, v in breaks],
        [(a, b) for a, b, _ in pictographic],
        unicode_version,
    )


def write_table(table: BreakTable, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(table.to_dict(), f)
    logger.info("Wrote %d break ranges to %s", len(table), path)
    return path


def fetch_ucd_file(name: str, version: str, session: requests.Session | None = None, timeout: float = 30) -> str:
    """Download one UCD file for the given Unicode version."""
    if name not in UCD_SUBDIRS:
        raise ValueError(f"unknown UCD file {name!r}")
    url = UCD_BASE_URL.format(version=version, subdir=UCD_SUBDIRS[name], name=name)
    http = session or requests
    logger.info("Fetching %s", url)
    resp = http.get(url, timeout=timeout)
    resp.raise_for_status()
    resp.encoding = "utf-8"
    return resp.text


def build_from_unicode_org(version: str, out_path, session: requests.Session | None = None) -> BreakTable:
    """Fetch the property files for version, build the table and write it to out_path."""
    break_text = fetch_ucd_file("GraphemeBreakProperty.txt", version, session)
    emoji_text = fetch_ucd_file("emoji-data.txt", version, session)
    table = build_table(break_text, emoji_text, version)
    write_table(table, out_path)
    return table


def parse_break_test(text: str) -> list[tuple[list[int], list[list[int]]]]:
    """Cases from GraphemeBreakTest.txt: ÷ 0020 × 0308 ÷ gives ([0x20, 0x308], [[0x20, 0x308]])."""
    cases = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        clusters = []
        current = []
        for token in TEST_TOKEN_RE.findall(line):
            if token == "÷":
                if current:
                    clusters.append(current)
                    current = []
            elif token != "×":
                current.append(int(token, 16))
        if current:
            clusters.append(current)
        cases.append(([cp for c in clusters for cp in c], clusters))
    return cases
