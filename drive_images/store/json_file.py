"""JSON file implementation of the image registry store."""

import os
import logging
import tempfile
from typing import Optional

from .base import DEFAULT_OPTION_KEY, Images, RegistryStoreBase, decode_blob, encode_blob


class JSONFileStore(RegistryStoreBase):
    """Keeps the registry blob in a single JSON file."""

    def __init__(
        self,
        path: str,
        option_key: str = DEFAULT_OPTION_KEY,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize JSON file store.

        Args:
            path: Location of the JSON file (created on first save)
            option_key: Name of the persisted blob
            logger: Optional logger instance
        """
        super().__init__(option_key, logger)
        self.path = os.path.abspath(path)
        self.logger.debug(f"Using JSON file store at {self.path}")

    def load(self) -> Images:
        """Load the registry, treating a missing file as empty."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                blob = f.read()
        except FileNotFoundError:
            self.logger.debug(f"No registry file at {self.path}, starting empty")
            return {}
        except OSError as e:
            self.logger.error(f"Error reading registry file {self.path}: {e}")
            raise

        return decode_blob(blob, self.logger)

    def save(self, images: Images) -> None:
        """Write the registry atomically (temp file + rename)."""
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".registry-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(encode_blob(images))
            os.replace(tmp_path, self.path)
        except OSError as e:
            self.logger.error(f"Error writing registry file {self.path}: {e}")
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        self.logger.debug(f"Saved {len(images)} images to {self.path}")

    def health_check(self) -> bool:
        """Check that the file's directory is writable."""
        directory = os.path.dirname(self.path)
        if os.path.isdir(directory):
            return os.access(directory, os.W_OK)
        return os.access(os.path.dirname(directory) or ".", os.W_OK)
