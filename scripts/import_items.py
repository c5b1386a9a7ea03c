#!/usr/bin/env python3
"""Seed the item collection from an exported material list.

Usage examples:
  python scripts/import_items.py material_list.txt --format table
  python scripts/import_items.py raw.md --format quoted --output data/items.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from libs.core.config import get_settings
from libs.core.exceptions import StorageUnavailable
from libs.tracker.importers import PARSERS
from libs.tracker.item_store import ItemStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import items from a material list.")
    parser.add_argument("source", type=Path, help="Material list to read")
    parser.add_argument(
        "--format",
        choices=sorted(PARSERS),
        default="table",
        help="table: '| Item | Total | Missing | Available |' rows; quoted: '\"Name\",12' lines",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Item collection to write (default: configured items file)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        text = args.source.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    items = PARSERS[args.format](text)
    output = args.output or get_settings().items_path
    try:
        ItemStore(output).save(items)
    except StorageUnavailable as e:
        print(f"Error writing file: {e.message}", file=sys.stderr)
        return 1

    print(f"Successfully converted {len(items)} items to {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
