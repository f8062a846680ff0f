"""Validation utilities for the image registry."""

import re
from urllib.parse import urlparse
from typing import Iterable, Optional, Tuple

SAFE_URL_SCHEMES = frozenset({"http", "https", "ftp", "ftps"})

CONTROL_CHARS_RE = re.compile(r"[\x00-\x20\x7f]")


def is_valid_url(
    url: str,
    schemes: Optional[Iterable[str]] = None,
) -> Tuple[bool, str]:
    """Validate an absolute URL.

    Args:
        url: The URL to validate
        schemes: Allowed schemes (any scheme if not specified)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    if not result.scheme:
        return False, "URL must have a scheme"

    if schemes is not None:
        allowed = set(schemes)
        if result.scheme.lower() not in allowed:
            return False, f"URL must use one of: {', '.join(sorted(allowed))}"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def safe_url(url: Optional[str], schemes: Iterable[str] = SAFE_URL_SCHEMES) -> str:
    """Return url for use in markup, or "" if its scheme is not allowed.

    Control characters and whitespace are ignored when reading the scheme,
    since browsers skip them too (``java\\tscript:``). Scheme-less values such
    as relative paths are returned unchanged.

    Args:
        url: Stored URL
        schemes: Allowed schemes

    Returns:
        The stripped URL, or an empty string
    """
    text = (url or "").strip()
    try:
        scheme = urlparse(CONTROL_CHARS_RE.sub("", text)).scheme
    except ValueError:
        return ""
    if scheme and scheme.lower() not in schemes:
        return ""
    return text


def is_blank(value: Optional[str]) -> bool:
    """Check whether a submitted value is missing or whitespace only."""
    return value is None or not str(value).strip()
