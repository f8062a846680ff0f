"""Redis implementation of the image registry store."""

import logging
from typing import Optional

import redis

from .base import DEFAULT_OPTION_KEY, Images, RegistryStoreBase, decode_blob, encode_blob


class RedisStore(RegistryStoreBase):
    """Keeps the registry blob in a single Redis string value."""

    def __init__(
        self,
        redis_url: Optional[str] = None,
        option_key: str = DEFAULT_OPTION_KEY,
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            option_key: Redis key holding the blob
            client: Optional pre-built client (takes precedence over redis_url)
            logger: Optional logger instance
        """
        super().__init__(option_key, logger)

        if client is None:
            if not redis_url:
                raise ValueError("Either redis_url or client is required")
            client = redis.from_url(
                redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            self.logger.info(f"Redis store enabled with key={option_key}")

        self.redis_url = redis_url
        self.client = client

    def load(self) -> Images:
        try:
            blob = self.client.get(self.option_key)
        except redis.RedisError as e:
            self.logger.error(f"Redis load error: {e}")
            raise

        if isinstance(blob, bytes):
            blob = blob.decode("utf-8")
        return decode_blob(blob, self.logger)

    def save(self, images: Images) -> None:
        try:
            self.client.set(self.option_key, encode_blob(images))
        except redis.RedisError as e:
            self.logger.error(f"Redis save error: {e}")
            raise

    def health_check(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            self.logger.warning(f"Redis health check failed: {e}")
            return False

    def close(self) -> None:
        """Close Redis connection."""
        self.client.close()
        self.logger.info("Redis connection closed")
