"""Persistence layer for the image registry."""

import logging
from typing import Optional

from .base import RegistryStoreBase, MemoryStore, DEFAULT_OPTION_KEY, encode_blob, decode_blob
from .json_file import JSONFileStore
from .redis_store import RedisStore
from .models import ImageRecord


def create_store(config, logger: Optional[logging.Logger] = None) -> RegistryStoreBase:
    """Build the store selected by configuration.

    Redis is used when ``config.redis_url`` is set, otherwise the JSON file
    at ``config.storage_path``.
    """
    if config.redis_url:
        return RedisStore(
            redis_url=config.redis_url,
            option_key=config.option_key,
            logger=logger,
        )
    return JSONFileStore(
        path=config.storage_path,
        option_key=config.option_key,
        logger=logger,
    )


__all__ = [
    "RegistryStoreBase",
    "MemoryStore",
    "JSONFileStore",
    "RedisStore",
    "ImageRecord",
    "DEFAULT_OPTION_KEY",
    "encode_blob",
    "decode_blob",
    "create_store",
]
