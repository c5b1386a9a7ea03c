"""
Whole-document JSON persistence.

Every document (items, shared secrets, archives) is read and replaced as a
unit. Writes go to a sibling ``.tmp`` file which is then renamed over the
target, so readers never observe a half-written document.
"""

import json
import logging
from pathlib import Path
from typing import Any

from libs.core.exceptions import StorageUnavailable

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    """Parse a JSON document, raising StorageUnavailable on any failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise StorageUnavailable(f"Could not read {path.name}: {e}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise StorageUnavailable(f"Could not parse {path.name}: {e}", path=str(path)) from e


def write_json(path: Path, data: Any) -> None:
    """Atomically replace ``path`` with the pretty-printed JSON of ``data``."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
    except (OSError, TypeError, ValueError) as e:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            logger.debug(f"[JsonDocuments] Could not remove temp file {tmp}")
        raise StorageUnavailable(f"Could not write {path.name}: {e}", path=str(path)) from e
