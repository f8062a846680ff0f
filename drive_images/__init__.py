"""Core logic for the Google Drive image registry."""

from .normalizer import normalize, extract_file_id, build_direct_url
from .keygen import KeyGenerator, slugify
from .registry import ImageRegistry, build_registry
from .exceptions import DriveImagesError, EmptyInputError

__all__ = [
    "normalize",
    "extract_file_id",
    "build_direct_url",
    "KeyGenerator",
    "slugify",
    "ImageRegistry",
    "build_registry",
    "DriveImagesError",
    "EmptyInputError",
]
