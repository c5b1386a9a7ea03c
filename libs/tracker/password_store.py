"""
Shared password set.

A single JSON document ``{"passwords": [...]}``. Any password in the set
grants full read/write access; the auth cookie simply carries one of them.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional

from libs.core.exceptions import (
    LastPasswordRemoval,
    PasswordConflict,
    PasswordNotFound,
    StorageUnavailable,
)
from libs.tracker.json_documents import read_json, write_json

logger = logging.getLogger(__name__)


class PasswordStore:
    def __init__(self, path: Path, initial_password: Optional[str] = None):
        self.path = Path(path)
        self.initial_password = initial_password
        self._lock = threading.Lock()

    def _load(self) -> List[str]:
        if not self.path.exists():
            if self.initial_password:
                write_json(self.path, {"passwords": [self.initial_password]})
                logger.info(f"[Passwords] Created {self.path} with the initial password")
            else:
                raise StorageUnavailable("config not available", path=str(self.path))
        data = read_json(self.path)
        passwords = data.get("passwords") if isinstance(data, dict) else None
        if passwords is None:
            return []
        if not isinstance(passwords, list):
            raise StorageUnavailable("config not available", path=str(self.path))
        return [str(p) for p in passwords]

    def list(self) -> List[str]:
        with self._lock:
            return self._load()

    def is_authorized(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return token in self.list()

    def add(self, password: str) -> List[str]:
        with self._lock:
            passwords = self._load()
            if password in passwords:
                raise PasswordConflict()
            passwords.append(password)
            write_json(self.path, {"passwords": passwords})
        logger.info(f"[Passwords] Added a password (total: {len(passwords)})")
        return passwords

    def remove(self, password: str) -> List[str]:
        with self._lock:
            passwords = self._load()
            if password not in passwords:
                raise PasswordNotFound()
            if len(passwords) <= 1:
                raise LastPasswordRemoval()
            passwords = [p for p in passwords if p != password]
            write_json(self.path, {"passwords": passwords})
        logger.info(f"[Passwords] Removed a password (total: {len(passwords)})")
        return passwords
