#!/usr/bin/env python3
"""Run the tracker service with the configured host and port.

Usage:
  python scripts/run_tracker.py
  TRACKER_PORT=8080 python scripts/run_tracker.py
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import uvicorn

from libs.core.config import get_settings


def main() -> int:
    settings = get_settings()
    uvicorn.run(
        "apps.services.tracker.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
