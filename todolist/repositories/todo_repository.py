"""Todo repository - snapshot persistence layer."""

from __future__ import annotations

import json
import logging
from typing import List, Sequence

from pydantic import ValidationError

from ..models import TodoRecord
from ..storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "LC"


class TodoSnapshotRepository:
    """Reads and writes the whole todo list as one JSON value under a fixed key."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> List[TodoRecord]:
        """Load the persisted list.

        A missing key yields an empty list. Malformed data is discarded and
        also yields an empty list.
        """
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding malformed todo snapshot under key=%s", self.key)
            return []
        if not isinstance(payload, list):
            logger.warning("Discarding todo snapshot under key=%s: expected a list", self.key)
            return []
        try:
            return [TodoRecord.model_validate(item) for item in payload]
        except ValidationError as exc:
            logger.warning(
                "Discarding todo snapshot under key=%s: %d invalid entries",
                self.key,
                exc.error_count(),
            )
            return []

    def save(self, todos: Sequence[TodoRecord]) -> None:
        """Replace the persisted list with ``todos``."""
        payload = json.dumps([todo.to_storage() for todo in todos], ensure_ascii=False)
        self.storage.set_item(self.key, payload)

    def has_snapshot(self) -> bool:
        return self.storage.get_item(self.key) is not None

    def clear(self) -> None:
        """Remove the persisted list (testing helper)."""
        self.storage.remove_item(self.key)
