"""Abstract base class for image registry persistence."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from .models import UNKNOWN_CREATED, ImageRecord

DEFAULT_OPTION_KEY = "gdrive_image_loader_images"

Images = Dict[str, ImageRecord]


def encode_blob(images: Images) -> str:
    """Serialize the registry to its persisted JSON form.

    Args:
        images: Ordered mapping of key to record

    Returns:
        JSON object text, keys in insertion order
    """
    return json.dumps(
        {key: record.to_dict() for key, record in images.items()},
        ensure_ascii=False,
        indent=2,
    )


def decode_blob(blob: Optional[str], logger: Optional[logging.Logger] = None) -> Images:
    """Deserialize a persisted registry blob.

    A missing, unreadable or non-object blob loads as an empty registry.
    Malformed records are kept under their key so that a later save neither
    drops them nor hands the key to a new record: an unusable ``created``
    becomes ``UNKNOWN_CREATED`` and a non-object value becomes a record with
    no URL.

    Args:
        blob: JSON text (or None when nothing has been stored yet)
        logger: Optional logger for warnings

    Returns:
        Ordered mapping of key to record
    """
    logger = logger or logging.getLogger(__name__)
    if not blob:
        return {}

    try:
        data = json.loads(blob)
    except ValueError as e:
        logger.warning(f"Stored image registry is not valid JSON, starting empty: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning("Stored image registry is not a mapping, starting empty")
        return {}

    images: Images = {}
    for key, value in data.items():
        if not isinstance(value, dict):
            logger.warning(f"Image record {key} is not a mapping, keeping it without a URL")
            value = {"raw": value if isinstance(value, str) else ""}
        try:
            images[key] = ImageRecord.from_dict(key, value)
        except (KeyError, ValueError) as e:
            logger.warning(f"Image record {key} has no usable creation time ({e}), keeping it")
            images[key] = ImageRecord.from_dict(key, {**value, "created": UNKNOWN_CREATED})
    return images


class RegistryStoreBase(ABC):
    """Load/save collaborator holding the whole registry as one blob."""

    def __init__(self, option_key: str = DEFAULT_OPTION_KEY, logger: Optional[logging.Logger] = None):
        """Initialize store.

        Args:
            option_key: Name of the persisted blob
            logger: Optional logger instance
        """
        self.option_key = option_key
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    def load(self) -> Images:
        """Load the full registry.

        Returns:
            Ordered mapping of key to record (empty if nothing stored)
        """
        pass

    @abstractmethod
    def save(self, images: Images) -> None:
        """Replace the persisted registry with ``images``.

        Args:
            images: Ordered mapping of key to record
        """
        pass

    def health_check(self) -> bool:
        """Check if the backing storage is reachable.

        Returns:
            True if healthy, False otherwise
        """
        return True

    def close(self) -> None:
        """Release any connections."""
        pass


class MemoryStore(RegistryStoreBase):
    """In-process store keeping the serialized blob in memory."""

    def __init__(self, option_key: str = DEFAULT_OPTION_KEY, logger: Optional[logging.Logger] = None):
        super().__init__(option_key, logger)
        self._blob: Optional[str] = None
        self.save_count = 0

    def load(self) -> Images:
        return decode_blob(self._blob, self.logger)

    def save(self, images: Images) -> None:
        self._blob = encode_blob(images)
        self.save_count += 1

    def dump(self) -> Optional[str]:
        """Return the serialized blob as last saved."""
        return self._blob
