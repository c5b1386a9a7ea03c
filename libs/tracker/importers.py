"""
Seed importers: build an item collection from exported material lists.

Two input shapes are understood:

* a Markdown table ``| Item | Total | Missing | Available |`` as exported by
  the in-game schematic tool; every item starts at zero gathered;
* a loose list of ``"Name",12`` lines, where a trailing ✅ marks the item as
  already completed.
"""

import re
from typing import List

from libs.tracker.models import Item

TABLE_ROW = re.compile(r"^\s*\|\s*(.+?)\s*\|\s*(\d+)\s*\|\s*(\d+)\s*\|\s*(\d+)\s*\|")
QUOTED_LINE = re.compile(r'"([^"]+)"\s*,?\s*(\d+)')
COMPLETED_MARK = "✅"


def _is_table_header(name: str) -> bool:
    return name == "Item" or name.startswith("Material List for")


def parse_material_table(text: str) -> List[Item]:
    items = []
    for line in text.splitlines():
        match = TABLE_ROW.match(line)
        if not match:
            continue
        name = match.group(1).strip()
        if _is_table_header(name):
            continue
        items.append(Item(name=name, target=int(match.group(2)), gathered=0))
    return items


def parse_quoted_list(text: str) -> List[Item]:
    items = []
    for line in text.splitlines():
        match = QUOTED_LINE.search(line)
        if not match:
            continue
        target = int(match.group(2))
        gathered = target if COMPLETED_MARK in line else 0
        items.append(Item(name=match.group(1), target=target, gathered=gathered))
    return items


PARSERS = {
    "table": parse_material_table,
    "quoted": parse_quoted_list,
}
