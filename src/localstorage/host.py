"""
Accessor for the host persistent storage facility.
"""

from __future__ import annotations

import logging
from typing import Optional

from localstorage.config import LocalStorageConfig, get_config
from localstorage.engines.base import EngineType, StorageEngine, get_engine

logger = logging.getLogger(__name__)


def get_host_storage(config: Optional[LocalStorageConfig] = None) -> Optional[StorageEngine]:
    """
    Get the host storage facility described by the configuration.

    Returns None when the host facility is disabled
    (``LOCALSTORAGE_STORAGE_TYPE=memory``). Errors creating the facility
    propagate; ``LocalStorage`` treats them as an unavailable host.
    """
    config = config or get_config()

    if not config.host_enabled:
        logger.debug("Host storage disabled by configuration")
        return None

    return get_engine(EngineType.FILE, path=config.get_storage_path())
