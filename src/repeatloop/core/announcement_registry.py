"""Announcement categories used to control status messages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnnouncementCategory:
    id: str
    label: str
    default_enabled: bool = True


ANNOUNCEMENT_CATEGORIES: tuple[AnnouncementCategory, ...] = (
    AnnouncementCategory("repeat", "Repeat start and stop"),
    AnnouncementCategory("repeat_progress", "Repeat count updates"),
    AnnouncementCategory("repeat_completed", "Repeat completion"),
    AnnouncementCategory("validation", "Invalid repeat range warnings"),
)

ANNOUNCEMENT_CATEGORY_MAP = {category.id: category for category in ANNOUNCEMENT_CATEGORIES}

__all__ = [
    "AnnouncementCategory",
    "ANNOUNCEMENT_CATEGORIES",
    "ANNOUNCEMENT_CATEGORY_MAP",
]
