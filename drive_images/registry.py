"""Business logic for the image registry."""

import logging
import re
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Union

from .exceptions import EmptyInputError
from .keygen import KeyGenerator
from .normalizer import normalize
from .store import create_store
from .store.base import Images, RegistryStoreBase
from .store.models import ImageRecord
from .common.validators import is_blank

LINE_SPLIT_RE = re.compile(r"\r?\n")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ImageRegistry:
    """Service layer mapping stable keys to normalized Drive image records.

    Every mutation loads the whole registry from the store, changes it and
    saves it back. There is no locking: callers must serialize writers.
    """

    def __init__(
        self,
        store: RegistryStoreBase,
        key_generator: Optional[KeyGenerator] = None,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize image registry.

        Args:
            store: Persistence collaborator
            key_generator: Optional key generator
            logger: Optional logger
            clock: Optional clock for creation timestamps
        """
        self.store = store
        self.generator = key_generator or KeyGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or _utc_now

    def add(self, raw: str, title: Optional[str] = None) -> str:
        """Register a single image.

        Args:
            raw: Drive share URL, file ID or any image URL
            title: Optional human label (defaults to raw)

        Returns:
            The key assigned to the new record

        Raises:
            EmptyInputError: If raw is empty or whitespace
        """
        if is_blank(raw):
            raise EmptyInputError("Image URL or File ID required")

        images = self.store.load()
        record = self._insert(images, raw.strip(), title)
        self.store.save(images)

        self.logger.info(f"Added image: {record.key} -> {record.url}")
        return record.key

    def bulk_import(self, text: Union[str, Iterable[str]]) -> int:
        """Register one image per line.

        Blank lines are skipped; each line is used as both raw input and
        title. The batch is saved once.

        Args:
            text: Newline separated block, or an iterable of blocks (each
                element is split on line breaks as well; None is skipped)

        Returns:
            Number of records inserted

        Raises:
            EmptyInputError: If the whole block is empty or whitespace
        """
        blocks = [text] if isinstance(text, str) else [b for b in text if b is not None]
        lines = [
            line.strip()
            for block in blocks
            for line in LINE_SPLIT_RE.split(str(block))
            if not is_blank(line)
        ]
        if not lines:
            raise EmptyInputError("Bulk import text is empty")

        images = self.store.load()
        for line in lines:
            record = self._insert(images, line, None)
            self.logger.debug(f"Imported image: {record.key} -> {record.url}")
        self.store.save(images)

        self.logger.info(f"Imported {len(lines)} images")
        return len(lines)

    def delete(self, key: str) -> bool:
        """Delete an image.

        Args:
            key: The key to delete

        Returns:
            True if a record was removed
        """
        images = self.store.load()
        if key not in images:
            self.logger.debug(f"Delete of unknown key ignored: {key}")
            return False

        del images[key]
        self.store.save(images)

        self.logger.info(f"Deleted image: {key}")
        return True

    def get(self, key: str) -> Optional[ImageRecord]:
        """Look up an image by key.

        Args:
            key: The key to lookup

        Returns:
            The record or None if not found
        """
        record = self.store.load().get(key)
        if record is None:
            self.logger.debug(f"Image key not found: {key}")
        return record

    def get_url(self, key: str) -> Optional[str]:
        """Return the direct-view URL for a key, if registered."""
        record = self.get(key)
        return record.url if record else None

    def list(self) -> List[ImageRecord]:
        """List all images in insertion order."""
        return list(self.store.load().values())

    def keys(self) -> List[str]:
        return list(self.store.load().keys())

    def __len__(self) -> int:
        return len(self.store.load())

    def __contains__(self, key: object) -> bool:
        return key in self.store.load()

    def health_check(self) -> bool:
        return self.store.health_check()

    def close(self) -> None:
        """Close store connections."""
        self.store.close()

    def _insert(self, images: Images, raw: str, title: Optional[str]) -> ImageRecord:
        """Build a record for raw and add it to the in-progress snapshot."""
        title = title.strip() if title and title.strip() else raw

        base_key = self.generator.generate(title)
        key = self.generator.with_suffix(base_key, images)
        if key != base_key:
            self.logger.debug(f"Key collision on {base_key}, using {key}")

        record = ImageRecord(
            key=key,
            title=title,
            raw=raw,
            url=normalize(raw),
            created=self.clock(),
        )
        images[key] = record
        return record


def build_registry(config, logger: Optional[logging.Logger] = None) -> ImageRegistry:
    """Wire a registry from configuration (store selection and key settings)."""
    generator = KeyGenerator(
        max_seed_length=config.key_max_seed_length,
        fallback_prefix=config.key_fallback_prefix,
    )
    return ImageRegistry(
        store=create_store(config, logger=logger),
        key_generator=generator,
        logger=logger,
    )
