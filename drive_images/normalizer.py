"""Google Drive share link normalization.

Turns the many shapes a Drive image reference can take (``/file/d/<ID>/view``
share links, ``open?id=<ID>`` links, ``/d/<ID>`` links, bare file IDs) into a
single direct-view URL. Anything that is not recognizably a Drive reference
is passed through unchanged, so ``normalize`` never raises.
"""

import re
from typing import Callable, NamedTuple, Optional, Tuple

from .common.validators import is_valid_url

DRIVE_HOST = "drive.google.com"
DIRECT_VIEW_MARKER = "drive.google.com/uc"
DIRECT_VIEW_TEMPLATE = "https://drive.google.com/uc?export=view&id={file_id}"

# Heuristic: shorter tokens are too likely to be unrelated words.
BARE_ID_MIN_LENGTH = 10

FILE_PATH_ID_RE = re.compile(r"/file/d/([A-Za-z0-9_-]+)")
QUERY_ID_RE = re.compile(r"[?&]id=([A-Za-z0-9_-]+)")
GENERIC_PATH_ID_RE = re.compile(r"/d/([A-Za-z0-9_-]+)")
BARE_ID_RE = re.compile(r"^[A-Za-z0-9_-]{%d,}$" % BARE_ID_MIN_LENGTH)


class NormalizationRule(NamedTuple):
    """A named normalization step.

    ``apply`` receives the trimmed input and returns the normalized URL, or
    ``None`` when the rule does not match.
    """

    name: str
    apply: Callable[[str], Optional[str]]


def build_direct_url(file_id: str) -> str:
    """Build the direct-view URL for a Drive file ID."""
    return DIRECT_VIEW_TEMPLATE.format(file_id=file_id)


def _already_direct(value: str) -> Optional[str]:
    if DIRECT_VIEW_MARKER in value:
        return value
    return None


def _external_url(value: str) -> Optional[str]:
    is_valid, _ = is_valid_url(value)
    if is_valid and DRIVE_HOST not in value:
        return value
    return None


def _pattern_rule(pattern: "re.Pattern[str]") -> Callable[[str], Optional[str]]:
    def apply(value: str) -> Optional[str]:
        match = pattern.search(value)
        if match:
            return build_direct_url(match.group(1))
        return None

    return apply


def _bare_id(value: str) -> Optional[str]:
    if BARE_ID_RE.match(value):
        return build_direct_url(value)
    return None


# Order matters: the looser patterns further down would misfire on inputs
# that the earlier ones already handle.
NORMALIZATION_RULES: Tuple[NormalizationRule, ...] = (
    NormalizationRule("already_direct", _already_direct),
    NormalizationRule("external_url", _external_url),
    NormalizationRule("file_path_id", _pattern_rule(FILE_PATH_ID_RE)),
    NormalizationRule("query_id", _pattern_rule(QUERY_ID_RE)),
    NormalizationRule("generic_path_id", _pattern_rule(GENERIC_PATH_ID_RE)),
    NormalizationRule("bare_id", _bare_id),
)


def _coerce(raw) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raw = str(raw)
    return raw.strip()


def match_rule(raw) -> Tuple[Optional[str], str]:
    """Run the rule list and report which rule produced the result.

    Args:
        raw: Share URL, bare file ID or arbitrary text

    Returns:
        Tuple of (rule name or None for the fallback, normalized value)
    """
    value = _coerce(raw)
    for rule in NORMALIZATION_RULES:
        result = rule.apply(value)
        if result is not None:
            return rule.name, result
    return None, value


def normalize(raw) -> str:
    """Convert a Drive share link or file ID into a direct-view URL.

    Args:
        raw: Share URL, bare file ID or arbitrary text

    Returns:
        Direct-view URL, or the trimmed input when no Drive file ID can be
        derived from it
    """
    return match_rule(raw)[1]


def extract_file_id(raw) -> Optional[str]:
    """Return the Drive file ID ``normalize`` would use, if any.

    Args:
        raw: Share URL, bare file ID or arbitrary text

    Returns:
        The file ID, or None for passthrough inputs
    """
    rule_name, url = match_rule(raw)
    if rule_name is None or rule_name == "external_url":
        return None
    match = QUERY_ID_RE.search(url)
    return match.group(1) if match else None
