"""
Logging for the gather board.

The tracker process logs to stdout and, unless disabled, to a rotating
``system.log`` under ``TRACKER_LOG_DIR``. The lifespan handler calls
``setup_logging`` once; modules just use ``logging.getLogger(__name__)``
and prefix messages with their component, e.g. ``[Broker]``.

Accepted mutations get one line each through ``log_mutation``:

    [Mutation] CLAIM | item=Iron Ore | claimer=Bob | claimed=30 | subscribers=3
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

SYSTEM_LOG_NAME = "system.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
ROTATED_FILES = 5

FILE_FORMAT = "%(asctime)s | %(levelname)-5s | %(name)-28s | %(message)s"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-5s | %(name)-20s | %(message)s"

# Per-connection and per-request chatter
QUIET_LOGGERS = ("httpx", "httpcore", "sse_starlette", "asyncio")

_configured = False


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = True,
    log_dir: Optional[Path] = None,
    service_name: str = "tracker",
) -> None:
    """
    Attach the console and rotating file handlers to the root logger.

    Only the first call has any effect, so an app rebuilt in the same
    process (tests) keeps one set of handlers.

    Args:
        level: Level name; unknown names fall back to INFO
        log_to_file: Also write ``system.log`` (10 MB, 5 rotations)
        log_dir: Directory for ``system.log``
        service_name: Logger that receives the startup line
    """
    global _configured
    if _configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, "%H:%M:%S"))
    root.addHandler(console)

    log_file = None
    if log_to_file:
        directory = Path(log_dir) if log_dir else Path("logs/tracker")
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / SYSTEM_LOG_NAME
        file_handler = RotatingFileHandler(
            log_file, maxBytes=MAX_LOG_BYTES, backupCount=ROTATED_FILES, encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, "%Y-%m-%d %H:%M:%S"))
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    where = f", file={log_file.absolute()}" if log_file else ""
    logging.getLogger(service_name).info(
        f"[Logging] {service_name} logging at {logging.getLevelName(log_level)}{where}"
    )


def log_mutation(logger: logging.Logger, kind: str, name: str, detail: str) -> None:
    """One line per accepted gather/claim change."""
    logger.info(f"[Mutation] {kind.upper()} | item={name} | {detail}")
