"""Fetch GraphemeBreakProperty.txt and emoji-data.txt from unicode.org and write a break table."""
import argparse
import logging
import sys
from pathlib import Path

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))

from clustersplit.config import load_config
from clustersplit.ucd import build_from_unicode_org

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    cfg = load_config()
    p = argparse.ArgumentParser(description="Build grapheme break table")
    p.add_argument("--unicode-version", default=cfg.get("unicode_version"))
    p.add_argument("--output", "-o", default=str(root / "data" / "grapheme_break.json"))
    args = p.parse_args()
    table = build_from_unicode_org(args.unicode_version, args.output)
    logger.info("Done: %d ranges for Unicode %s", len(table), args.unicode_version)
    return 0


if __name__ == "__main__":
    sys.exit(main())
