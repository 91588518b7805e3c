"""Minimum-data gate run before full insight synthesis."""

from __future__ import annotations

from typing import Sized

from constants import MIN_JOURNALS, MIN_PHOTOS
from models import MinimumRequirements


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} more {singular if count == 1 else plural}"


def check_minimum_requirements(photos: Sized, journal_entries: Sized,
                               min_photos: int = MIN_PHOTOS,
                               min_journals: int = MIN_JOURNALS) -> MinimumRequirements:
    """Report whether enough data exists, and if not, exactly what is missing."""
    photos_count = len(photos)
    journals_count = len(journal_entries)
    met = photos_count >= min_photos and journals_count >= min_journals

    message = ""
    if not met:
        missing_photos = max(0, min_photos - photos_count)
        missing_journals = max(0, min_journals - journals_count)
        parts = []
        if missing_photos:
            parts.append(_plural(missing_photos, "photo", "photos"))
        if missing_journals:
            parts.append(_plural(missing_journals, "journal entry", "journal entries"))
        message = "Need " + " and ".join(parts)

    return MinimumRequirements(
        met=met,
        photos_count=photos_count,
        journals_count=journals_count,
        message=message,
    )
