"""Image markup and shortcode expansion for content rendering."""

import html
import logging
import re
from typing import Dict, Optional

from ..store.models import ImageRecord
from .validators import safe_url

logger = logging.getLogger(__name__)

IMAGE_SHORTCODE = "gdrive_image"
URL_SHORTCODE = "gdrive_image_url"

SHORTCODE_RE = re.compile(r"\[(gdrive_image_url|gdrive_image)((?:\s+[^\]]*)?)\]")
ATTR_RE = re.compile(r"""([A-Za-z_][\w-]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"']+))""")


def parse_attributes(text: str) -> Dict[str, str]:
    """Parse ``name="value"`` shortcode attributes.

    Args:
        text: Attribute portion of a shortcode

    Returns:
        Lowercased attribute names mapped to values
    """
    attrs = {}
    for match in ATTR_RE.finditer(text or ""):
        name = match.group(1).lower()
        value = next(v for v in match.groups()[1:] if v is not None)
        attrs[name] = value
    return attrs


def render_image_tag(
    record: ImageRecord,
    alt: Optional[str] = None,
    css_class: Optional[str] = None,
) -> str:
    """Render an ``<img>`` tag for a record.

    Args:
        record: The image record
        alt: Alt text (defaults to the record title)
        css_class: Optional class attribute

    Returns:
        Escaped HTML markup (an unsafe URL scheme leaves ``src`` empty)
    """
    alt_text = record.title if alt is None else alt
    parts = [
        f'src="{html.escape(safe_url(record.url), quote=True)}"',
        f'alt="{html.escape(alt_text, quote=True)}"',
    ]
    if css_class:
        parts.append(f'class="{html.escape(css_class, quote=True)}"')
    return f"<img {' '.join(parts)}>"


def expand_shortcodes(text: str, registry) -> str:
    """Replace image shortcodes in content with markup.

    ``[gdrive_image key="k" alt="a"]`` becomes an ``<img>`` tag and
    ``[gdrive_image_url key="k"]`` becomes the escaped direct URL. Shortcodes
    with a missing or unknown key render as an empty string.

    Args:
        text: Content containing shortcodes
        registry: ImageRegistry used to resolve keys

    Returns:
        Content with shortcodes expanded
    """

    def replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        attrs = parse_attributes(match.group(2))
        key = attrs.get("key", "").strip()
        if not key:
            return ""

        record = registry.get(key)
        if record is None:
            logger.debug(f"Shortcode {name} references unknown key: {key}")
            return ""

        if name == URL_SHORTCODE:
            return html.escape(safe_url(record.url), quote=True)
        return render_image_tag(record, alt=attrs.get("alt"), css_class=attrs.get("class"))

    return SHORTCODE_RE.sub(replace, text or "")
