"""Durable key-value stores holding whole-entity JSON snapshots."""
import copy
import json
import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict

from ecoeats.utilities.errors import PersistenceWriteFailure

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r'[^A-Za-z0-9_.-]')


class MemoryStore:
    """In-process store; values are deep-copied to mimic serialization."""

    def __init__(self):
        self._data: Dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.loads(json.dumps(value))
        except (TypeError, ValueError) as e:
            raise PersistenceWriteFailure(f"Value for '{key}' is not serializable: {e}") from e

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """One JSON file per key inside a directory; writes are atomic (temp file + move)."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / (_SAFE_KEY.sub('_', key) + '.json')

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON for key '{key}': {e}")
            return default
        except OSError as e:
            logger.error(f"Error reading key '{key}': {e}")
            return default

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{path.stem}_", suffix=".json")
        except OSError as e:
            raise PersistenceWriteFailure(f"Cannot write '{key}': {e}") from e
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(value, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceWriteFailure(f"Cannot write '{key}': {e}") from e
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning(f"Could not remove temp file {tmp_path}")

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceWriteFailure(f"Cannot delete '{key}': {e}") from e


__all__ = ['MemoryStore', 'JsonFileStore']
