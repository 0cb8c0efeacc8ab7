from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CLI_STORAGE_PATH = Path("data/todos.json")


@dataclass(frozen=True)
class TodoSettings:
    storage_key: str
    storage_path: Optional[Path]
    strict_age: bool
    environment: str


def parse_bool_env(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in {"true", "1", "yes", "on"}:
        return True
    if normalized in {"false", "0", "no", "off"}:
        return False
    return None


def parse_int_env(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid integer env value '%s', using default=%s", value, default)
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw_value = os.getenv(name)
    parsed = parse_bool_env(raw_value)
    if parsed is None:
        if raw_value is not None:
            logger.warning("Invalid boolean env value %s='%s', using default=%s", name, raw_value, default)
        return default
    return parsed


@lru_cache
def get_settings() -> TodoSettings:
    storage_path = os.getenv("TODO_STORAGE_PATH")
    return TodoSettings(
        storage_key=os.getenv("TODO_STORAGE_KEY") or "LC",
        storage_path=Path(storage_path) if storage_path else None,
        strict_age=_bool_env("TODO_STRICT_AGE", False),
        environment=os.getenv("ENVIRONMENT", "development").lower(),
    )
