# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""ttl2jsonld CLI."""

from __future__ import annotations

import argparse
import sys

from ..convert import convert_file
from ..errors import TransformError
from ..log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ttl2jsonld",
        description="Convert a Turtle file to JSON-LD",
        epilog="example: ttl2jsonld specs/vf/vf.TTL  (writes specs/vf/vf.json)",
    )
    parser.add_argument("input", help="Turtle input file")
    parser.add_argument("output", nargs="?", help="JSON-LD output file (default: input with a .json suffix)")
    return parser


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)
    try:
        output = convert_file(args.input, args.output)
    except TransformError as exc:
        print(f"ttl2jsonld: {exc}", file=sys.stderr)
        return 1
    print(f"{args.input} -> {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
