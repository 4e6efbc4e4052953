"""
Persistence Module

Load and save named blobs of serialized state. The calendar store owns
serialization; a port only moves strings in and out of storage.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

import structlog

from .base import PersistenceError


logger = structlog.get_logger(__name__)


class PersistencePort(ABC):
    """Key-value storage for serialized state blobs."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Get the blob stored under a key, or None when missing."""
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store a blob under a key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""
        pass


class InMemoryPersistence(PersistencePort):
    """Process-local storage, mainly for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._data)


class JsonFilePersistence(PersistencePort):
    """One ``<key>.json`` file per key inside a state directory."""

    def __init__(self, state_dir: Union[str, Path]):
        self.state_dir = Path(state_dir)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise PersistenceError(f"Invalid state key: {key!r}")
        return self.state_dir / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

    def save(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            self.state_dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {path}: {e}") from e
        logger.debug("state_saved", key=key, bytes=len(value))

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise PersistenceError(f"Failed to delete {path}: {e}") from e

    def keys(self) -> List[str]:
        if not self.state_dir.is_dir():
            return []
        return sorted(p.name[: -len(".json")] for p in self.state_dir.glob("*.json"))


__all__ = [
    "PersistencePort",
    "InMemoryPersistence",
    "JsonFilePersistence",
]
