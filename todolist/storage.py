"""Local key-value storage backends.

Both backends expose the ``localStorage`` surface the todo list was written
against: string keys mapped to string values.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Protocol, Union, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):
    """Storage interface for string values under string keys."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...


@dataclass
class InMemoryStorage:
    """Simple in-memory storage."""

    items: Dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def clear(self) -> None:
        self.items.clear()


class JsonFileStorage:
    """Storage persisted as a single JSON object on disk.

    Every write rewrites the whole file through a temporary file and
    ``os.replace``, so readers never observe a partially written value.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = str(value)
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def clear(self) -> None:
        self._write({})

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Unreadable storage file at %s; treating it as empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file at %s does not hold an object; treating it as empty", self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(items, handle, ensure_ascii=False, indent=2)
            if self.path.exists():
                os.chmod(tmp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
        logger.debug("Storage saved to %s", self.path)


def build_storage(path: Optional[Union[str, Path]]) -> KeyValueStorage:
    """Return file storage when ``path`` is given, in-memory storage otherwise."""
    if path:
        logger.info("Using JSON file storage at %s", path)
        return JsonFileStorage(path)
    logger.info("TODO_STORAGE_PATH not set, using in-memory storage")
    return InMemoryStorage()
