"""
Credential stores.

FileCredentialStore is the command-line counterpart of a browser cookie:
one token kept in a user-private file between invocations.
"""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class FileCredentialStore:
    """Keeps the session token in a single file."""

    def __init__(self, path: Path):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> Optional[str]:
        try:
            token = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def set(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(token.strip(), encoding="utf-8")
        os.chmod(self._path, 0o600)
        logger.debug(f"Stored session credential at {self._path}")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
        logger.debug(f"Cleared session credential at {self._path}")


class MemoryCredentialStore:
    """In-process store, used by tests and embedded callers."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token or None

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None
