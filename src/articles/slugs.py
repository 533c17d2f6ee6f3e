"""URL slugs for article titles, Devanagari included."""

import re
import time
from typing import Callable

_DISALLOWED = re.compile(r"[^\w\s\u0900-\u097F-]")
_WHITESPACE = re.compile(r"[\s_]+")
_MAX_BASE_LENGTH = 100


def slugify_title(title: str) -> str:
    slug = _DISALLOWED.sub("", title.strip().lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = re.sub(r"-{2,}", "-", slug).strip("-")
    return slug[:_MAX_BASE_LENGTH].rstrip("-")


def generate_slug(title: str) -> str:
    """Slug for a new article: the cleaned title plus a millisecond suffix."""
    base = slugify_title(title) or "article"
    return f"{base}-{int(time.time() * 1000)}"


def unique_slug(title: str, exists: Callable[[str], bool]) -> str:
    """``generate_slug`` with a counter appended while ``exists`` reports a clash."""
    slug = generate_slug(title)
    candidate, counter = slug, 2
    while exists(candidate):
        candidate = f"{slug}-{counter}"
        counter += 1
    return candidate


__all__ = ["generate_slug", "slugify_title", "unique_slug"]
