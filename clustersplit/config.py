"""Config: load/save YAML settings (break table path, Unicode version, log level)."""
import logging
import os
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "table_path": None,
    "unicode_version": "15.1.0",
    "log_level": "WARNING",
    "ellipsis": "…",
}

CONFIG_ENV = "CLUSTERSPLIT_CONFIG"
CONFIG_PATH = Path("configs") / "clustersplit.yaml"


def config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV) or CONFIG_PATH)


def load_config(path: str | Path | None = None) -> dict:
    """Defaults merged with the YAML file at path (or $CLUSTERSPLIT_CONFIG, or configs/clustersplit.yaml)."""
    path = Path(path) if path else config_path()
    if not path.exists():
        logger.debug("Config %s not found, using defaults", path)
        return dict(DEFAULT_CONFIG)
    with open(path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(cfg).__name__}")
    unknown = set(cfg) - set(DEFAULT_CONFIG)
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(sorted(unknown)))
    return {**DEFAULT_CONFIG, **{k: v for k, v in cfg.items() if k in DEFAULT_CONFIG}}


def save_config(cfg: dict, path: str | Path | None = None) -> Path:
    path = Path(path) if path else config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(cfg, f, sort_keys=False, allow_unicode=True)
    return path


def configure_logging(cfg: dict) -> None:
    level = str(cfg.get("log_level") or "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")
