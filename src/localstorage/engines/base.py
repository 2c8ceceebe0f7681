"""
Base storage engine protocol and factory.

Defines the capability set every backing store must provide. Values are
always text; encoding structured values is the facade's job.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Type, runtime_checkable

logger = logging.getLogger(__name__)


class EngineType(str, Enum):
    """Available storage engine types."""
    FILE = "file"
    MEMORY = "memory"


@runtime_checkable
class StorageEngine(Protocol):
    """
    Protocol defining the storage engine interface.

    Any object providing these five methods can be used as the host
    storage facility, including test doubles.
    """

    def count(self) -> int:
        """Return the number of stored entries."""
        ...

    def clear(self) -> None:
        """Remove all entries."""
        ...

    def get_item(self, key: str) -> Optional[str]:
        """Return the raw text stored for key, or None."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store or overwrite the raw text for key."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove the entry for key if present."""
        ...


class BaseEngine(ABC):
    """
    Abstract base class for the bundled storage engines.
    """

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored entries."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries. Idempotent."""
        pass

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the raw text stored for key, or None if the key is unknown."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store or overwrite the raw text for key."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove the entry for key. A missing key is not an error."""
        pass

    def __len__(self) -> int:
        return self.count()


# Storage engine registry
_ENGINES: Dict[EngineType, Type[BaseEngine]] = {}


def register_engine(engine_type: EngineType):
    """Decorator to register a storage engine."""
    def decorator(cls: Type[BaseEngine]) -> Type[BaseEngine]:
        _ENGINES[engine_type] = cls
        return cls
    return decorator


def get_engine(engine_type: EngineType | str, **kwargs: Any) -> BaseEngine:
    """
    Get a storage engine instance.

    Args:
        engine_type: Engine type to instantiate
        **kwargs: Engine-specific options (e.g. ``path`` for file storage)

    Returns:
        Storage engine instance

    Raises:
        ValueError: If the engine type is unknown
    """
    # Import engines to register them
    from localstorage.engines import file, memory  # noqa: F401

    try:
        engine_type = EngineType(engine_type)
    except ValueError:
        raise ValueError(f"Unknown engine type: {engine_type}") from None

    if engine_type not in _ENGINES:
        raise ValueError(f"Unknown engine type: {engine_type}")

    engine_class = _ENGINES[engine_type]
    logger.debug(f"Creating {engine_class.__name__} engine")
    return engine_class(**kwargs)
