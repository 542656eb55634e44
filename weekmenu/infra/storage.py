"""Key-value persistence port for the catalog, plan and pantry snapshots.

Stores hold JSON-serializable values. `load` never raises: a missing key or
unreadable payload comes back as None and the caller falls back to its
empty default. Writes go through `save_quietly`, which logs and swallows any
failure so an in-memory mutation is never rolled back by persistence.
"""
from __future__ import annotations
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class SnapshotStore(Protocol):
    def load(self, key: str) -> Any: ...

    def save(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """In-process store keeping serialized JSON text per key."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Invalid JSON stored under %s: %s", key, e)
            return None

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def put_raw(self, key: str, raw: str) -> None:
        '''Stores text as-is, bypassing serialization.'''
        self._data[key] = raw


class JsonFileStore:
    """One JSON file per key inside a data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> Any:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            logger.warning(f"Invalid JSON in {path.name}: {e}")
            return None
        except OSError as e:
            logger.error(f"Error reading {path.name}: {e}")
            return None

    def save(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.data_dir), prefix=f".{key}_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(value, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)


def save_quietly(store: Optional[SnapshotStore], key: str, value: Any) -> None:
    if store is None:
        return
    try:
        store.save(key, value)
    except Exception as e:
        logger.error("Failed to persist %s: %s", key, e)


def load_quietly(store: Optional[SnapshotStore], key: str) -> Any:
    if store is None:
        return None
    try:
        return store.load(key)
    except Exception as e:
        logger.error("Failed to load %s: %s", key, e)
        return None
