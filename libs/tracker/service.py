"""
Tracker service: the mutation path.

Every accepted mutation is serialized through the item store, reconciled,
persisted, then broadcast to all subscribers. The requester sees the change
through its own subscription like everyone else.
"""

import logging
from functools import partial
from typing import List

from libs.core.logging_config import log_mutation
from libs.tracker.broker import NotificationBroker
from libs.tracker.item_store import ItemStore
from libs.tracker.models import Item
from libs.tracker.reconciler import claim_in_collection, gather_in_collection

logger = logging.getLogger(__name__)


class TrackerService:
    def __init__(self, store: ItemStore, broker: NotificationBroker):
        self.store = store
        self.broker = broker

    async def list_items(self) -> List[Item]:
        return await self.store.read()

    async def update_gathered(self, name: str, gathered: int) -> List[Item]:
        """Record gathered progress for one item and broadcast the new state."""
        items = await self.store.mutate(partial(gather_in_collection, name=name, gathered=gathered))
        # No await between commit and publish: broadcasts follow commit order.
        delivered = self.broker.publish_items(items)
        log_mutation(logger, "gather", name, f"gathered={gathered} | subscribers={delivered}")
        return items

    async def update_claim(self, name: str, claimed: int, claimer: str) -> List[Item]:
        """Create, move or release a claimer's reservation and broadcast."""
        items = await self.store.mutate(
            partial(claim_in_collection, name=name, claimer=claimer, quantity=claimed)
        )
        delivered = self.broker.publish_items(items)
        log_mutation(
            logger, "claim", name, f"claimer={claimer.strip()} | claimed={claimed} | subscribers={delivered}"
        )
        return items
