"""
Key/value storage facade with automatic in-memory fallback.

Values are JSON-encoded on the way in and decoded on the way out. Engine
failures never reach the caller: ``set``, ``remove`` and ``clear`` report
them as ``False``, ``get`` reports them as a miss.

Usage:
    from localstorage import LocalStorage

    storage = LocalStorage()
    storage.set("settings", {"theme": "dark"})
    storage.get("settings")               # {"theme": "dark"}
    storage.get("missing", ["fallback"])  # ["fallback"]
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Optional

from localstorage.codec import decode, encode
from localstorage.config import LocalStorageConfig, get_config
from localstorage.engines.base import StorageEngine
from localstorage.engines.memory import MemoryStorage
from localstorage.exceptions import DecodeError, EngineUnavailableError
from localstorage.host import get_host_storage

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class LocalStorage:
    """
    Typed get/set/remove/clear over a host storage facility.

    The engine is chosen once, in ``__init__``: the host facility if it
    passes a write/remove probe, otherwise a fresh ``MemoryStorage``. It is
    never re-evaluated.

    Args:
        host: Host storage facility. Omit to use the configured one
            (see ``get_host_storage``); pass None to force the fallback.
        config: Configuration used to build the default host facility
    """

    def __init__(
        self,
        host: Optional[StorageEngine] = _MISSING,
        *,
        config: Optional[LocalStorageConfig] = None,
    ):
        if host is _MISSING:
            host = self._resolve_host(config or get_config())

        try:
            self._check_support(host)
        except EngineUnavailableError as e:
            logger.info(f"Host storage unavailable ({e}), using in-memory storage")
            self._storage_engine: StorageEngine = MemoryStorage()
            self._using_fallback = True
        else:
            logger.debug(f"Using host storage {type(host).__name__}")
            self._storage_engine = host
            self._using_fallback = False

    @staticmethod
    def _resolve_host(config: LocalStorageConfig) -> Optional[StorageEngine]:
        """Build the configured host facility, or None if that fails."""
        try:
            return get_host_storage(config)
        except Exception as e:
            logger.warning(f"Failed to open host storage: {e}")
            return None

    @staticmethod
    def _check_support(host: Optional[StorageEngine]) -> None:
        """
        Check that the host facility is present and writable.

        Some facilities only fail on write (e.g. a read-only filesystem or
        an exhausted quota), so a throwaway key is written and removed.
        The key is redrawn until it does not collide with an existing entry.

        Raises:
            EngineUnavailableError: If the host cannot be used
        """
        if host is None:
            raise EngineUnavailableError("no host storage facility")

        if not isinstance(host, StorageEngine):
            raise EngineUnavailableError(
                f"{type(host).__name__} does not implement the storage engine interface"
            )

        try:
            key = f"__{random.randint(0, 10**7)}__"
            while host.get_item(key) is not None:
                key = f"__{random.randint(0, 10**7)}__"
            host.set_item(key, "")
            host.remove_item(key)
        except Exception as e:
            raise EngineUnavailableError(f"probe failed: {e}") from e

    @property
    def engine(self) -> StorageEngine:
        """The active storage engine."""
        return self._storage_engine

    @property
    def using_fallback(self) -> bool:
        """True if the in-memory engine was selected instead of the host."""
        return self._using_fallback

    @property
    def length(self) -> int:
        """Number of key/value pairs in the active engine (0 if it cannot be read)."""
        try:
            return self._storage_engine.count()
        except Exception as e:
            logger.warning(f"Failed to count items: {e}")
            return 0

    def __len__(self) -> int:
        return self.length

    def _attempt(self, operation: str, func: Callable[..., Any], *args: Any) -> bool:
        """Run an engine call, converting any failure into False."""
        try:
            func(*args)
        except Exception as e:
            logger.warning(f"Storage {operation} failed: {type(e).__name__}: {e}")
            return False
        return True

    def get(self, key: str, default: Any = _MISSING) -> Any:
        """
        Return the value stored for key.

        If the key does not exist, or its stored text cannot be decoded,
        returns default if one was given, otherwise None. A stored JSON
        ``null`` is also replaced by the default.
        """
        has_default = default is not _MISSING
        fallback = default if has_default else None

        try:
            storage_value = self._storage_engine.get_item(key)
        except Exception as e:
            logger.warning(f"Storage get {key!r} failed: {type(e).__name__}: {e}")
            return fallback

        if not storage_value:
            return fallback

        try:
            value = decode(storage_value)
        except DecodeError as e:
            logger.debug(f"Discarding value for {key!r}: {e}")
            value = None

        if has_default and value is None:
            return default
        return value

    def set(self, key: str, value: Any) -> bool:
        """
        Set the value for key, creating the entry if it did not exist.

        Returns False if the value cannot be encoded as JSON or the engine
        rejects the write.
        """
        try:
            storage_value = encode(value)
        except (TypeError, ValueError, RecursionError) as e:
            logger.warning(f"Cannot store {key!r}: {e}")
            return False

        return self._attempt(f"set {key!r}", self._storage_engine.set_item, key, storage_value)

    def remove(self, key: str) -> bool:
        """Remove the entry for key. Removing a missing key succeeds."""
        return self._attempt(f"remove {key!r}", self._storage_engine.remove_item, key)

    def clear(self) -> bool:
        """Remove all entries."""
        return self._attempt("clear", self._storage_engine.clear)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(engine={type(self._storage_engine).__name__}, fallback={self._using_fallback})"
