"""
Storage engines for localstorage.

An engine is a text-only key/value store exposing count, clear,
get_item, set_item and remove_item. Two engines ship with the package:

- FileStorage: persistent, a JSON file on local disk (the default host facility)
- MemoryStorage: volatile, a dict living as long as its owner

Example:
    from localstorage.engines import get_engine, EngineType

    engine = get_engine(EngineType.FILE, path="/tmp/storage.json")
    engine.set_item("greeting", '"hello"')
"""

from localstorage.engines.base import (
    BaseEngine,
    EngineType,
    StorageEngine,
    get_engine,
    register_engine,
)
from localstorage.engines.file import FileStorage
from localstorage.engines.memory import MemoryStorage

__all__ = [
    "BaseEngine",
    "EngineType",
    "StorageEngine",
    "get_engine",
    "register_engine",
    "FileStorage",
    "MemoryStorage",
]
