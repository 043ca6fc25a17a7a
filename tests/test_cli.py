"""Tests for the clustersplit CLI."""
import io
import json

import pytest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from clustersplit import cli
from clustersplit.config import CONFIG_ENV

FLAG_US = "\N{REGIONAL INDICATOR SYMBOL LETTER U}\N{REGIONAL INDICATOR SYMBOL LETTER S}"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV, raising=False)


def test_count(capsys):
    assert cli.main(["count", "ab" + FLAG_US]) == 0
    assert capsys.readouterr().out.strip() == "3"


def test_split_json(capsys):
    assert cli.main(["split", "--json", "e\N{COMBINING ACUTE ACCENT}x"]) == 0
    assert json.loads(capsys.readouterr().out) == ["e\N{COMBINING ACUTE ACCENT}", "x"]


def test_split_separator(capsys):
    assert cli.main(["split", "-s", "/", "abc"]) == 0
    assert capsys.readouterr().out.strip() == "a/b/c"


def test_split_reads_stdin(capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("\r\nz"))
    assert cli.main(["split", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == ["\r\n", "z"]


def test_spans_utf16(capsys):
    assert cli.main(["spans", "--utf16", "a" + FLAG_US]) == 0
    assert json.loads(capsys.readouterr().out) == [[0, 1], [1, 5]]
    assert cli.main(["spans", "a" + FLAG_US]) == 0
    assert json.loads(capsys.readouterr().out) == [[0, 1], [1, 3]]


def test_truncate(capsys):
    assert cli.main(["truncate", "-n", "2", "--ellipsis", "~", "abcd"]) == 0
    assert capsys.readouterr().out.rstrip("\n") == "ab~"


def test_truncate_invalid_limit(capsys):
    assert cli.main(["truncate", "-n", "-1", "abcd"]) == 1
    assert "limit" in capsys.readouterr().err


def test_bad_config(tmp_path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("- 1\n", encoding="utf-8")
    assert cli.main(["--config", str(cfg), "count", "a"]) == 1
    assert "bad config" in capsys.readouterr().err


def test_missing_table(tmp_path, capsys):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(f"table_path: {tmp_path / 'missing.json'}\n", encoding="utf-8")
    assert cli.main(["--config", str(cfg), "count", "a"]) == 1


def test_build_table(tmp_path, capsys, monkeypatch):
    calls = []

    def fake_build(version, out):
        calls.append((version, out))
        return [None] * 7

    monkeypatch.setattr("clustersplit.ucd.build_from_unicode_org", fake_build)
    out = str(tmp_path / "t.json")
    assert cli.main(["build-table", "--unicode-version", "15.0.0", "-o", out]) == 0
    assert calls == [("15.0.0", out)]
    assert "7 ranges" in capsys.readouterr().out
