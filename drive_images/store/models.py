"""Data models for the image registry."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

LEGACY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Stand-in creation time for stored records whose own timestamp is unusable.
UNKNOWN_CREATED = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_created(value: Any) -> datetime:
    """Parse a stored creation timestamp.

    Accepts datetimes, ISO-8601 strings and the legacy ``YYYY-MM-DD HH:MM:SS``
    form. Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        created = value
    else:
        text = str(value).strip()
        try:
            created = datetime.fromisoformat(text)
        except ValueError:
            created = datetime.strptime(text, LEGACY_TIME_FORMAT)

    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created


@dataclass
class ImageRecord:
    """Represents a registered image."""

    key: str
    title: str
    raw: str
    url: str
    created: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted mapping (the key lives outside it)."""
        return {
            "title": self.title,
            "raw": self.raw,
            "url": self.url,
            "created": self.created.isoformat(),
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Convert to a mapping including the key."""
        return {"key": self.key, **self.to_dict()}

    @classmethod
    def from_dict(cls, key: str, data: Dict[str, Any]) -> "ImageRecord":
        """Create from a persisted mapping."""
        raw = str(data.get("raw", ""))
        return cls(
            key=key,
            title=str(data.get("title") or raw),
            raw=raw,
            url=str(data.get("url", "")),
            created=parse_created(data["created"]),
        )
