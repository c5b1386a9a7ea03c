"""
Tracker - shared gather/claim state with live broadcast.

- models: Item and Claim
- item_store: whole-collection store with one critical section
- reconciler: pure gather/claim rules
- broker: fan-out of snapshots to live subscribers
- snapshots: periodic archives with retention
- service: mutation path (store -> reconcile -> persist -> broadcast)
- password_store: shared password set
- importers: seed parsers for material lists
"""

from libs.tracker.broker import NotificationBroker, Subscription, build_update_event
from libs.tracker.item_store import ItemStore
from libs.tracker.models import Claim, Item
from libs.tracker.password_store import PasswordStore
from libs.tracker.reconciler import apply_claim, apply_gather
from libs.tracker.service import TrackerService
from libs.tracker.snapshots import SnapshotScheduler

__all__ = [
    "Claim",
    "Item",
    "ItemStore",
    "NotificationBroker",
    "PasswordStore",
    "SnapshotScheduler",
    "Subscription",
    "TrackerService",
    "apply_claim",
    "apply_gather",
    "build_update_event",
]
