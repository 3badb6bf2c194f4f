"""Where the client keeps its tokens between calls and between runs."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Any

log = logging.getLogger(__name__)

StoredSession = dict[str, Any]


class TokenStorage(ABC):
    """
    Persist ``{"accessToken", "refreshToken", "user"}`` records.

    Implementations hold at most one record.
    """

    @abstractmethod
    def load(self) -> StoredSession | None: ...

    @abstractmethod
    def save(self, record: StoredSession) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...


class MemoryTokenStorage(TokenStorage):
    """Session-scoped storage: lives as long as the process."""

    def __init__(self) -> None:
        self._record: StoredSession | None = None

    def load(self) -> StoredSession | None:
        return dict(self._record) if self._record is not None else None

    def save(self, record: StoredSession) -> None:
        self._record = dict(record)

    def clear(self) -> None:
        self._record = None


class FileTokenStorage(TokenStorage):
    """
    Durable storage in a JSON file readable only by its owner.

    Writes go to a temporary file in the same directory and are moved into
    place, so a crash never leaves a half-written session behind.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)

    def load(self) -> StoredSession | None:
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return None
        except (OSError, ValueError):
            log.warning("session.storage.unreadable", extra={"path": self.path})
            return None
        return data if isinstance(data, dict) else None

    def save(self, record: StoredSession) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".session-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(record, fh)
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def clear(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
