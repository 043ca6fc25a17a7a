"""Tests for config loading."""
import pytest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from clustersplit.config import CONFIG_ENV, DEFAULT_CONFIG, config_path, load_config, save_config


def test_defaults_when_missing(tmp_path):
    assert load_config(tmp_path / "nope.yaml") == DEFAULT_CONFIG


def test_load_merges_over_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("table_path: data/table.json\nlog_level: INFO\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg["table_path"] == "data/table.json"
    assert cfg["log_level"] == "INFO"
    assert cfg["unicode_version"] == DEFAULT_CONFIG["unicode_version"]


def test_unknown_keys_dropped(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("bogus: 1\nellipsis: '...'\n", encoding="utf-8")
    cfg = load_config(path)
    assert "bogus" not in cfg
    assert cfg["ellipsis"] == "..."


def test_empty_file_is_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_save_then_load(tmp_path):
    cfg = {**DEFAULT_CONFIG, "table_path": "x.json"}
    path = save_config(cfg, tmp_path / "sub" / "cfg.yaml")
    assert load_config(path) == cfg


def test_env_overrides_path(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("log_level: DEBUG\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(path))
    assert config_path() == path
    assert load_config()["log_level"] == "DEBUG"


def test_repo_config_matches_defaults():
    repo_cfg = Path(__file__).resolve().parent.parent / "configs" / "clustersplit.yaml"
    assert load_config(repo_cfg) == DEFAULT_CONFIG
