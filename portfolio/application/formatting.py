from __future__ import annotations
from datetime import datetime
from typing import Iterable

MAX_LANGUAGES = 6
FALLBACK_UPDATED_LABEL = "recently"
PREVIEW_IMAGE_URL = "https://opengraph.githubassets.com/1/{owner}/{name}"


def build_language_list(primary_language: str | None, languages: Iterable[str | None] = ()) -> list[str]:
    """
    Primary language first, then the rest in their given order.
    Duplicates and empty names are dropped; at most MAX_LANGUAGES remain.
    """
    combined = [primary_language, *languages] if primary_language else list(languages)
    unique: list[str] = []
    for item in combined:
        if item and item not in unique:
            unique.append(item)
    return unique[:MAX_LANGUAGES]


def format_updated_label(value: str | None) -> str:
    """Short month and year, e.g. "Mar 2024", or "recently" when unknown."""
    if not value:
        return FALLBACK_UPDATED_LABEL
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError, AttributeError):
        return FALLBACK_UPDATED_LABEL
    return parsed.strftime("%b %Y")


def preview_image_url(owner: str, name: str) -> str:
    return PREVIEW_IMAGE_URL.format(owner=owner, name=name)
