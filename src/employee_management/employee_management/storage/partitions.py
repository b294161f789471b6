from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

from ..core.exceptions import PersistenceError
from .base import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PartitionStore:
    """JSON (de)serialization on top of a :class:`KeyValueStore`.

    Reads never fail: missing, unreadable or wrongly shaped partitions degrade
    to the supplied default. Writes that fail are logged and raised as
    :class:`PersistenceError`.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    @property
    def backend(self) -> KeyValueStore:
        return self._store

    def read(self, key: str, default_factory: Callable[[], T]) -> T:
        default = default_factory()
        try:
            raw = self._store.get(key)
        except Exception:
            logger.exception("Error reading partition %s", key)
            return default

        if raw is None or raw == "":
            return default

        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Partition %s holds corrupt JSON, using empty default", key)
            return default

        if not isinstance(value, type(default)):
            logger.warning(
                "Partition %s has type %s, expected %s; using empty default",
                key,
                type(value).__name__,
                type(default).__name__,
            )
            return default
        return value

    def write(self, key: str, value: Any) -> None:
        try:
            self._store.set(key, json.dumps(value, ensure_ascii=False))
        except Exception as e:
            logger.exception("Error writing partition %s", key)
            raise PersistenceError(f"Could not save {key}") from e

    def clear(self, key: str) -> None:
        try:
            self._store.remove(key)
        except Exception as e:
            logger.exception("Error removing partition %s", key)
            raise PersistenceError(f"Could not remove {key}") from e
