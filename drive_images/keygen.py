"""Registry key generation utilities."""

import re
import time
import unicodedata
from typing import Callable, Container, Optional

TAG_RE = re.compile(r"<[^>]*>")
SEPARATOR_RUN_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug.

    Args:
        text: Text to convert

    Returns:
        Slug made of ``[a-z0-9]`` runs joined by single hyphens (may be empty)
    """
    text = TAG_RE.sub("", text or "")
    text = unicodedata.normalize("NFKD", text)
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = SEPARATOR_RUN_RE.sub("-", text.lower())
    return text.strip("-")


class KeyGenerator:
    """Generate stable registry keys from titles or raw inputs."""

    def __init__(
        self,
        max_seed_length: int = 60,
        fallback_prefix: str = "img",
        time_func: Optional[Callable[[], float]] = None,
    ):
        """Initialize key generator.

        Args:
            max_seed_length: Number of seed characters kept before slugifying
            fallback_prefix: Prefix for timestamp keys when the slug is empty
            time_func: Clock returning Unix seconds (``time.time`` by default)
        """
        self.max_seed_length = max_seed_length
        self.fallback_prefix = fallback_prefix
        self.time_func = time_func or time.time

    def generate(self, seed: str) -> str:
        """Generate a key from seed text.

        Args:
            seed: Title or raw input

        Returns:
            Slug of the truncated seed, or ``<prefix>-<unix seconds>``
        """
        key = slugify((seed or "")[:self.max_seed_length])
        if not key:
            key = f"{self.fallback_prefix}-{int(self.time_func())}"
        return key

    @staticmethod
    def with_suffix(base_key: str, taken: Container[str]) -> str:
        """Resolve a collision by appending the smallest free numeric suffix.

        Args:
            base_key: Key produced by ``generate``
            taken: Keys already in use

        Returns:
            ``base_key`` if free, otherwise the first free ``base_key-<n>``
            for n = 1, 2, ...
        """
        if base_key not in taken:
            return base_key

        n = 1
        while f"{base_key}-{n}" in taken:
            n += 1
        return f"{base_key}-{n}"
