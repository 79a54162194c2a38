#!/usr/bin/env python3
"""Build a MathClass classification index from a local source table.

Reads a MathClass-N.txt file (e.g. MathClass-15.txt from
unicode.org/Public/math), builds the per-class range tables and reports
per-class range counts. Optionally writes the full r16/r32 tables as JSON.

Usage:
    python3 scripts/build_mathclass_index.py --source MathClass-15.txt
    python3 scripts/build_mathclass_index.py --source MathClass-15.txt --out data/mathclass.json
    python3 scripts/build_mathclass_index.py --source MathClass-15.txt --ordering sort --strict

Structured JSON output goes to stdout; human messages go to stderr.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import orjson

from mathclass.classifier import build
from mathclass.io_utils import index_summary, index_to_dict, read_lines, save_json
from mathclass.types import Err


def dump_json(obj: Any) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()


def log(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a MathClass classification index from a source table."
    )
    parser.add_argument(
        "--source", type=Path, required=True,
        help="Path to MathClass-N.txt",
    )
    parser.add_argument(
        "--out", type=Path, default=None,
        help="Write full r16/r32 tables as JSON to this path",
    )
    parser.add_argument(
        "--ordering", choices=("validate", "sort"), default="validate",
        help="validate: fail on out-of-order ranges; sort: sort each class first",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Fail if any code point belongs to more than one class",
    )
    parser.add_argument(
        "--skip-unknown-tags", action="store_true",
        help="Skip lines with unrecognized class tags instead of failing",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if not args.source.exists():
        log(f"ERROR: source table not found at {args.source}")
        return 1

    lines = read_lines(args.source)
    log(f"Building index from {args.source} ({len(lines)} lines)")
    result = build(
        lines,
        ordering=args.ordering,
        strict=args.strict,
        on_unknown_tag="skip" if args.skip_unknown_tags else "abort",
    )
    if isinstance(result, Err):
        log(f"ERROR: {result.error.message}")
        return 1
    index = result.value

    for skipped in index.diagnostics.skipped_unknown_tags:
        log(f"WARNING: skipped {skipped.message}")

    if args.out is not None:
        save_json(index_to_dict(index), args.out)
        log(f"Wrote tables to {args.out}")

    summary = index_summary(index)
    summary["source"] = str(args.source)
    dump_json(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
