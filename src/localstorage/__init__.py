"""
localstorage - Type-safe key/value storage with in-memory fallback.

Stores JSON-representable values in a host persistent facility (by
default a JSON file on local disk). When the host facility is missing or
unusable, an in-process store is used instead, so callers never need to
handle the difference.

Key Features:
- Values are JSON-encoded, compatible with any JSON tool
- Engine failures are reported as False, never raised
- Any object implementing StorageEngine can be injected as the host

Example usage:
    from localstorage import LocalStorage

    storage = LocalStorage()
    storage.set("recent", [1, 2, 3])
    storage.get("recent")           # [1, 2, 3]
    storage.get("unknown", {})      # {}
    storage.remove("recent")        # True
"""

__version__ = "0.1.0"

from localstorage.config import LocalStorageConfig, get_config, reset_config
from localstorage.engines import (
    BaseEngine,
    EngineType,
    FileStorage,
    MemoryStorage,
    StorageEngine,
    get_engine,
)
from localstorage.exceptions import (
    DecodeError,
    EngineUnavailableError,
    InvalidArgumentError,
    LocalStorageError,
    WriteRejectedError,
)
from localstorage.host import get_host_storage
from localstorage.local_storage import LocalStorage

__all__ = [
    "BaseEngine",
    "DecodeError",
    "EngineType",
    "EngineUnavailableError",
    "FileStorage",
    "InvalidArgumentError",
    "LocalStorage",
    "LocalStorageConfig",
    "LocalStorageError",
    "MemoryStorage",
    "StorageEngine",
    "WriteRejectedError",
    "get_config",
    "get_engine",
    "get_host_storage",
    "reset_config",
    "__version__",
]
