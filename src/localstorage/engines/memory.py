"""
In-memory storage engine.

Used when the host storage facility is missing or unusable. Nothing is
persisted beyond the lifetime of the instance.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from localstorage.engines.base import BaseEngine, EngineType, register_engine
from localstorage.exceptions import InvalidArgumentError

_MISSING: Any = object()


@register_engine(EngineType.MEMORY)
class MemoryStorage(BaseEngine):
    """
    Volatile storage engine backed by a plain dict.

    Example:
        storage = MemoryStorage()
        storage.set_item("key", "value")
        storage.get_item("key")  # "value"
    """

    def __init__(self) -> None:
        self._store: Dict[str, str] = {}

    def count(self) -> int:
        return len(self._store)

    def clear(self) -> None:
        """Remove all key/value pairs, if there are any."""
        self._store.clear()

    def get_item(self, key: str) -> Optional[str]:
        """
        Return the value stored for key, or None if the key does not exist.
        """
        return self._store.get(key)

    def remove_item(self, key: str) -> None:
        self._store.pop(key, None)

    def set_item(self, key: str, value: str = _MISSING) -> None:
        """
        Set the value for key, creating the entry if it did not exist.

        Only a missing value is rejected; an empty string is stored as is.

        Raises:
            InvalidArgumentError: If no value is given
        """
        if value is _MISSING or value is None:
            raise InvalidArgumentError(
                "Failed to execute 'set_item': 2 arguments required, but only 1 present"
            )

        self._store[key] = value
