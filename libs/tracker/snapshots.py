"""
Snapshot scheduler.

Periodically archives the full item collection into timestamped JSON files
and prunes the archive directory down to a retention cap. Runs once at
start, then on every interval.

Archive failures are logged and swallowed: a missed snapshot must never take
down the loop or surface on a request path. An empty or unreadable
collection simply skips the cycle.
"""

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from libs.core.exceptions import StorageUnavailable
from libs.tracker.item_store import ItemStore
from libs.tracker.json_documents import write_json
from libs.tracker.models import dump_items

logger = logging.getLogger(__name__)

ARCHIVE_PREFIX = "items-"
ARCHIVE_SUFFIX = ".json"
# Second precision, UTC, no characters that need escaping on any filesystem.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%SZ"
DEFAULT_INTERVAL_SECONDS = 300.0
DEFAULT_RETENTION = 50


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_archive_name(name: str) -> bool:
    return name.startswith(ARCHIVE_PREFIX) and name.endswith(ARCHIVE_SUFFIX)


class SnapshotScheduler:
    """
    Background archiver for the item collection.

    Archive names sort lexicographically in chronological order:
    ``items-2026-01-31T09-15-00Z.json``. Two archives in the same second get
    ``_01``, ``_02``... suffixes, which sort after the plain name.
    """

    def __init__(
        self,
        store: ItemStore,
        archive_dir: Path,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        retention: int = DEFAULT_RETENTION,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Args:
            store: Item store to snapshot
            archive_dir: Directory receiving archive files
            interval_seconds: Delay between archive cycles
            retention: Maximum number of archives kept
            clock: Source of the current UTC time
        """
        self.store = store
        self.archive_dir = Path(archive_dir)
        self.interval_seconds = interval_seconds
        self.retention = retention
        self._clock = clock

        self._running = False
        self._task: Optional[asyncio.Task] = None

        # Statistics
        self._cycle_count = 0
        self._archives_written = 0
        self._archives_removed = 0
        self._last_archive: Optional[Path] = None

    async def start(self):
        """Start the scheduler loop."""
        if self._running:
            logger.warning("[Snapshots] Already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(
            f"[Snapshots] Started (interval={self.interval_seconds}s, "
            f"retention={self.retention}, dir={self.archive_dir})"
        )

    async def stop(self):
        """Stop the scheduler loop."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("[Snapshots] Stopped")

    async def _run_loop(self):
        """Archive immediately, then once per interval."""
        while self._running:
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"[Snapshots] Error in archive cycle: {e}")
            await asyncio.sleep(self.interval_seconds)

    async def run_cycle(self) -> Optional[Path]:
        """One archive-then-prune cycle."""
        self._cycle_count += 1
        path = await self.archive_now()
        if path is not None:
            self.enforce_retention()
        return path

    async def archive_now(self) -> Optional[Path]:
        """
        Write one archive of the current collection.

        Returns:
            Path of the new archive, or None if the cycle was skipped or failed
        """
        try:
            items = await self.store.read()
        except StorageUnavailable as e:
            logger.debug(f"[Snapshots] Skipping cycle, store unreadable: {e}")
            return None
        if not items:
            logger.debug("[Snapshots] Skipping cycle, collection empty")
            return None

        try:
            self.archive_dir.mkdir(parents=True, exist_ok=True)
            path = self._next_archive_path()
            write_json(path, dump_items(items))
        except (OSError, StorageUnavailable) as e:
            logger.error(f"[Snapshots] Archive write failed: {e}")
            return None

        self._archives_written += 1
        self._last_archive = path
        logger.info(f"[Snapshots] Archive created: {path}")
        return path

    def _next_archive_path(self) -> Path:
        stamp = self._clock().astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
        path = self.archive_dir / f"{ARCHIVE_PREFIX}{stamp}{ARCHIVE_SUFFIX}"
        counter = 0
        while path.exists():
            counter += 1
            path = self.archive_dir / f"{ARCHIVE_PREFIX}{stamp}_{counter:02d}{ARCHIVE_SUFFIX}"
        return path

    def list_archives(self) -> List[Path]:
        """Archive files, oldest first."""
        if not self.archive_dir.exists():
            return []
        names = sorted(
            entry.name
            for entry in self.archive_dir.iterdir()
            if entry.is_file() and is_archive_name(entry.name)
        )
        return [self.archive_dir / name for name in names]

    def enforce_retention(self) -> int:
        """
        Delete the oldest archives until at most ``retention`` remain.

        Returns:
            Number of archives removed
        """
        try:
            archives = self.list_archives()
        except OSError as e:
            logger.error(f"[Snapshots] Could not list archives: {e}")
            return 0

        removed = 0
        while len(archives) > self.retention:
            oldest = archives.pop(0)
            try:
                oldest.unlink()
                removed += 1
            except OSError as e:
                logger.error(f"[Snapshots] Could not remove {oldest.name}: {e}")

        if removed:
            self._archives_removed += removed
            logger.info(f"[Snapshots] Pruned {removed} old archives")
        return removed

    def get_stats(self) -> Dict[str, Any]:
        """
        Get scheduler statistics.

        Returns:
            Statistics dictionary
        """
        return {
            "running": self._running,
            "interval_seconds": self.interval_seconds,
            "retention": self.retention,
            "cycle_count": self._cycle_count,
            "archives_written": self._archives_written,
            "archives_removed": self._archives_removed,
            "last_archive": self._last_archive.name if self._last_archive else None,
        }
