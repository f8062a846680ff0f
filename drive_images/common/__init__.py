"""Common utilities for the image registry."""

from .validators import is_valid_url, is_blank, safe_url
from .shortcodes import render_image_tag, expand_shortcodes, parse_attributes
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_blank",
    "safe_url",
    "render_image_tag",
    "expand_shortcodes",
    "parse_attributes",
    "setup_logging",
    "get_logger",
]
