"""
File-based storage engine.

Persists all entries as a single JSON object (``{"key": "value", ...}``)
at a configurable path, by default ``~/.localstorage/storage.json``.

Thread and process safety is achieved through file locking: reads take a
shared lock, writes hold an exclusive lock for the whole
read-modify-write cycle and replace the file atomically.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from pathlib import Path
from typing import IO, Any, Callable, Dict, Generator, Optional, Union

from localstorage.engines.base import BaseEngine, EngineType, register_engine
from localstorage.exceptions import InvalidArgumentError, WriteRejectedError

logger = logging.getLogger(__name__)


# Cross-platform file locking
if sys.platform == "win32":
    import msvcrt

    def _lock_file(f: IO, exclusive: bool = True) -> None:
        """Lock file on Windows."""
        msvcrt.locking(f.fileno(), msvcrt.LK_NBLCK if exclusive else msvcrt.LK_NBRLCK, 1)

    def _unlock_file(f: IO) -> None:
        """Unlock file on Windows."""
        msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
else:
    import fcntl

    def _lock_file(f: IO, exclusive: bool = True) -> None:
        """Lock file on Unix."""
        fcntl.flock(f.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)

    def _unlock_file(f: IO) -> None:
        """Unlock file on Unix."""
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


@contextlib.contextmanager
def file_lock(path: Path, exclusive: bool = True) -> Generator[IO, None, None]:
    """
    Context manager for file locking.

    Acquires a lock on a ``.lock`` file next to the target, so the target
    itself can be replaced while the lock is held.

    Args:
        path: Path to the file being protected
        exclusive: If True, acquire exclusive (write) lock; otherwise shared (read) lock

    Example:
        with file_lock(storage_file):
            ...
    """
    lock_path = path.with_suffix(path.suffix + ".lock")
    lock_file = open(lock_path, "a+")
    try:
        _lock_file(lock_file, exclusive)
        yield lock_file
    finally:
        try:
            _unlock_file(lock_file)
        except OSError as e:
            logger.debug(f"Failed to unlock {lock_path}: {e}")
        finally:
            lock_file.close()


@register_engine(EngineType.FILE)
class FileStorage(BaseEngine):
    """
    Persistent storage engine backed by a JSON file.

    Ideal for:
    - Command line tools and desktop applications
    - Single-machine deployments
    - Testing against a real persistent facility

    A missing file reads as empty. A file that cannot be parsed also reads
    as empty (with a warning) and is overwritten on the next write.
    Entries whose value is not a string are preserved on write.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        if path is None:
            from localstorage.config import get_config

            path = get_config().get_storage_path()
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"FileStorage initialized at {self._path}")

    @property
    def path(self) -> Path:
        """Location of the JSON storage file."""
        return self._path

    def _read(self) -> Dict[str, Any]:
        """Read all entries without locking."""
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self._path}: expected a JSON object")
            return {}
        return {str(k): v for k, v in data.items()}

    def _load(self) -> Dict[str, Any]:
        """Read all entries under a shared lock."""
        if not self._path.exists():
            return {}
        with file_lock(self._path, exclusive=False):
            return self._read()

    def _write(self, data: Dict[str, Any]) -> None:
        """Replace the storage file atomically. Caller holds the lock."""
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(self._path)

    def _update(
        self,
        operation: str,
        updater: Callable[[Dict[str, Any]], bool],
        key: Optional[str] = None,
    ) -> None:
        """
        Apply updater to the stored entries under an exclusive lock.

        The file is only rewritten when updater reports a change.

        Raises:
            WriteRejectedError: If the file cannot be locked or written
        """
        try:
            with file_lock(self._path, exclusive=True):
                data = self._read()
                if updater(data):
                    self._write(data)
        except OSError as e:
            raise WriteRejectedError(
                f"Failed to {operation} in {self._path}: {e}", key=key
            ) from e

    def count(self) -> int:
        return len(self._load())

    def clear(self) -> None:
        def updater(data: Dict[str, Any]) -> bool:
            if not data and self._path.exists():
                return False
            data.clear()
            return True

        self._update("clear storage", updater)
        logger.debug(f"Cleared {self._path}")

    def get_item(self, key: str) -> Optional[str]:
        """
        Return the text stored for key.

        Entries written by other tools with a non-string value are left in
        the file untouched but read as None.
        """
        value = self._load().get(key)
        if value is not None and not isinstance(value, str):
            logger.warning(f"Ignoring non-text value for {key!r} in {self._path}")
            return None
        return value

    def set_item(self, key: str, value: Any = None) -> None:
        """
        Store value for key. Non-string values are stored as ``str(value)``.

        Raises:
            InvalidArgumentError: If value is None
            WriteRejectedError: If the file cannot be written
        """
        if value is None:
            raise InvalidArgumentError(
                "Failed to execute 'set_item': 2 arguments required, but only 1 present"
            )
        text = value if isinstance(value, str) else str(value)

        def updater(data: Dict[str, Any]) -> bool:
            data[key] = text
            return True

        self._update("set item", updater, key=key)
        logger.debug(f"Saved item {key!r} to {self._path}")

    def remove_item(self, key: str) -> None:
        def updater(data: Dict[str, Any]) -> bool:
            if key not in data:
                return False
            del data[key]
            return True

        self._update("remove item", updater, key=key)
        logger.debug(f"Removed item {key!r} from {self._path}")
