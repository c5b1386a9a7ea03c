# conftest.py
# Ensure the repository root is on sys.path so pytest can import the
# top-level packages (apps, libs) consistently.

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)

if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from libs.core.config import TrackerSettings
from libs.tracker.item_store import ItemStore
from libs.tracker.models import Claim, Item


@pytest.fixture
def iron_ore():
    return Item(name="Iron Ore", target=100, gathered=20, claims=[])


@pytest.fixture
def sample_items():
    return [
        Item(name="Iron Ore", target=100, gathered=20),
        Item(
            name="Oak Log",
            target=40,
            gathered=10,
            claims=[Claim(claimer="Alice", claim_start=10, claim_end=25)],
        ),
        Item(name="Granite", target=10, gathered=10),
    ]


@pytest.fixture
def item_store(tmp_path, sample_items):
    store = ItemStore(tmp_path / "items.json")
    store.save(sample_items)
    return store


@pytest.fixture
def tracker_settings(tmp_path):
    """Settings rooted in a temp dir, with one shared password."""
    (tmp_path / "config.json").write_text(json.dumps({"passwords": ["hunter2"]}))
    return TrackerSettings(
        data_dir=tmp_path,
        log_to_file=False,
        backup_interval_seconds=3600,
        keepalive_seconds=30,
    )
