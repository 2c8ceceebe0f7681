"""
Pytest configuration and fixtures for localstorage tests.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Generator, List, Optional

import pytest

from localstorage.config import reset_config
from localstorage.engines import FileStorage, MemoryStorage


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    """Storage file inside a per-test temporary directory."""
    return tmp_path / "storage" / "storage.json"


@pytest.fixture(autouse=True)
def set_test_env(storage_path: Path) -> Generator[None, None, None]:
    """Point the default host facility at a temporary file for each test."""
    env = {
        "LOCALSTORAGE_STORAGE_PATH": str(storage_path),
        "LOCALSTORAGE_STORAGE_TYPE": "file",
    }
    original = {}
    for key, value in env.items():
        original[key] = os.environ.get(key)
        os.environ[key] = value
    reset_config()

    yield

    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    reset_config()


# ============================================================================
# Engine Fixtures
# ============================================================================


class RecordingStorage(MemoryStorage):
    """
    Host facility double that records calls and can be told to fail.

    Failures only start once ``fail_on`` is set, so the construction
    probe passes and the double becomes the active engine.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[str] = []
        self.fail_on: set = set()

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise OSError(f"{name} rejected")

    def count(self) -> int:
        self._record("count")
        return super().count()

    def clear(self) -> None:
        self._record("clear")
        super().clear()

    def get_item(self, key: str) -> Optional[str]:
        self._record("get_item")
        return super().get_item(key)

    def set_item(self, key: str, value: str = None) -> None:
        self._record("set_item")
        super().set_item(key, value)

    def remove_item(self, key: str) -> None:
        self._record("remove_item")
        super().remove_item(key)


class BrokenStorage:
    """Host facility double whose writes always fail, like a full quota."""

    def __init__(self) -> None:
        self.items: Dict[str, str] = {}

    def count(self) -> int:
        return len(self.items)

    def clear(self) -> None:
        self.items.clear()

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        raise OSError("QuotaExceededError: the quota has been exceeded")

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@pytest.fixture
def recording_storage() -> RecordingStorage:
    """A working host facility that records calls."""
    return RecordingStorage()


@pytest.fixture
def broken_storage() -> BrokenStorage:
    """A host facility that rejects every write."""
    return BrokenStorage()


@pytest.fixture
def file_storage(storage_path: Path) -> FileStorage:
    """File storage engine in a temporary directory."""
    return FileStorage(path=storage_path)
