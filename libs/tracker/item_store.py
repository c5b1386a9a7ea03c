"""
Item store: the single owner of the item collection.

The collection is one JSON document, read and replaced as a whole. Every
mutation is a read-modify-write of the whole collection under one lock;
there is no per-item locking. Mutation volume is human-driven, so one
coarse critical section is enough to make mutations serializable.
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, List

from pydantic import ValidationError

from libs.core.exceptions import StorageUnavailable
from libs.tracker.json_documents import read_json, write_json
from libs.tracker.models import Item, ItemList, dump_items

logger = logging.getLogger(__name__)


class ItemStore:
    """
    Durable item collection with a coarse critical section.

    ``load``/``save`` are the raw whole-document operations. ``read`` and
    ``mutate`` take the store lock; callers outside this module should use
    those. Nothing inside the locked region awaits, so a mutation that has
    taken the lock always runs to completion.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def load(self) -> List[Item]:
        """Load the collection. A missing file is an empty collection."""
        if not self.path.exists():
            return []
        data = read_json(self.path)
        try:
            return ItemList.validate_python(data)
        except ValidationError as e:
            raise StorageUnavailable(
                f"Malformed item collection in {self.path.name}: {e.error_count()} errors",
                path=str(self.path),
            ) from e

    def save(self, items: List[Item]) -> None:
        """Replace the whole collection atomically."""
        write_json(self.path, dump_items(items))

    async def read(self) -> List[Item]:
        async with self._lock:
            return self.load()

    async def mutate(self, change: Callable[[List[Item]], List[Item]]) -> List[Item]:
        """
        Apply ``change`` to the current collection and persist the result.

        Args:
            change: Pure function from the current collection to the next one.
                If it raises, nothing is written and the error propagates.

        Returns:
            The collection as persisted
        """
        async with self._lock:
            items = self.load()
            updated = change(items)
            self.save(updated)
            logger.debug(f"[ItemStore] Persisted {len(updated)} items to {self.path}")
            return updated
