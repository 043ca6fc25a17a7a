"""CLI entry point for clustersplit (split, count, spans, truncate, build-table)."""
import argparse
import json
import logging
import sys

import requests

from clustersplit.codepoints import to_utf16_units
from clustersplit.config import configure_logging, load_config
from clustersplit.graphemes import count_graphemes, grapheme_spans, split_into_graphemes, truncate_graphemes
from clustersplit.properties import TableError, get_classifier

logger = logging.getLogger(__name__)


def _read_text(args) -> str:
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def cmd_split(args, cfg):
    classifier = get_classifier(cfg)
    clusters = split_into_graphemes(_read_text(args), classifier)
    if args.json:
        print(json.dumps(clusters, ensure_ascii=False))
    else:
        print(args.separator.join(clusters))
    return 0


def cmd_count(args, cfg):
    print(count_graphemes(_read_text(args), get_classifier(cfg)))
    return 0


def cmd_spans(args, cfg):
    text = _read_text(args)
    units = to_utf16_units(text) if args.utf16 else text
    spans = grapheme_spans(units, get_classifier(cfg))
    print(json.dumps([[s.start, s.end] for s in spans]))
    return 0


def cmd_truncate(args, cfg):
    ellipsis = args.ellipsis
    if ellipsis is None:
        ellipsis = cfg.get("ellipsis") or ""
    print(truncate_graphemes(_read_text(args), args.limit, ellipsis, get_classifier(cfg)))
    return 0


def cmd_build_table(args, cfg):
    from clustersplit.ucd import build_from_unicode_org
    version = args.unicode_version or cfg.get("unicode_version")
    table = build_from_unicode_org(version, args.output)
    print(f"{len(table)} ranges (Unicode {version}) -> {args.output}")
    return 0


def _add_text_arg(p):
    p.add_argument("text", nargs="?", default=None, help="Text to segment (default: stdin)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="clustersplit", description="Extended grapheme cluster segmentation")
    p.add_argument("--config", default=None, help="YAML config file")
    sub = p.add_subparsers(dest="cmd", required=True)
    # split
    split_p = sub.add_parser("split", help="Print clusters")
    _add_text_arg(split_p)
    split_p.add_argument("--separator", "-s", default="|")
    split_p.add_argument("--json", action="store_true")
    split_p.set_defaults(func=cmd_split)
    # count
    count_p = sub.add_parser("count", help="Count clusters")
    _add_text_arg(count_p)
    count_p.set_defaults(func=cmd_count)
    # spans
    spans_p = sub.add_parser("spans", help="Print [start, end) offsets as JSON")
    _add_text_arg(spans_p)
    spans_p.add_argument("--utf16", action="store_true", help="Offsets in UTF-16 code units")
    spans_p.set_defaults(func=cmd_spans)
    # truncate
    trunc_p = sub.add_parser("truncate", help="Keep the first N clusters")
    _add_text_arg(trunc_p)
    trunc_p.add_argument("--limit", "-n", type=int, required=True)
    trunc_p.add_argument("--ellipsis", default=None)
    trunc_p.set_defaults(func=cmd_truncate)
    # build-table
    build_p = sub.add_parser("build-table", help="Build a break table from unicode.org data")
    build_p.add_argument("--unicode-version", default=None)
    build_p.add_argument("--output", "-o", default="data/grapheme_break.json")
    build_p.set_defaults(func=cmd_build_table)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"clustersplit: bad config: {e}", file=sys.stderr)
        return 1
    configure_logging(cfg)
    try:
        return args.func(args, cfg) or 0
    except (TableError, OSError, ValueError, requests.RequestException) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"clustersplit: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
