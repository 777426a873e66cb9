"""
Gallery image model for petfolio.

Gallery images carry a generated id for identity and a millisecond
timestamp for ordering; several images may share a timestamp.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .ids import generate_image_id, now_millis

ALL_CATEGORY = "all"


class GalleryCategory(str, Enum):
    """Categories an image can be filed under."""

    MY_ART = "my-art"
    BAMBI = "bambi"
    ANIMANGA = "animanga"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self.value]


CATEGORY_LABELS = {
    ALL_CATEGORY: "All",
    "my-art": "My Art",
    "bambi": "Bambi",
    "animanga": "Animanga",
}


def parse_category(value: "str | GalleryCategory") -> GalleryCategory:
    """
    Resolve a stored category.

    Raises:
        ValueError: If ``value`` is not one of the stored categories ("all" included)
    """
    return GalleryCategory(value)


@dataclass
class GalleryImage:
    """An image in the gallery."""

    id: str
    url: str
    caption: str
    timestamp: int
    category: GalleryCategory

    @classmethod
    def create_new(
        cls,
        url: str,
        caption: str,
        category: "str | GalleryCategory",
        timestamp: int | None = None,
    ) -> "GalleryImage":
        """Create an image with a fresh id, stamped with the current time."""
        return cls(
            id=generate_image_id(),
            url=url,
            caption=caption,
            timestamp=timestamp if timestamp is not None else now_millis(),
            category=parse_category(category),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored JSON shape."""
        return {
            "id": self.id,
            "url": self.url,
            "caption": self.caption,
            "timestamp": self.timestamp,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GalleryImage":
        """
        Create a GalleryImage from its stored JSON shape.

        Records written before images had their own id use the timestamp.
        """
        timestamp = int(data["timestamp"])
        return cls(
            id=str(data.get("id") or timestamp),
            url=data.get("url", ""),
            caption=data.get("caption", ""),
            timestamp=timestamp,
            category=parse_category(data["category"]),
        )

    @property
    def category_label(self) -> str:
        return self.category.label
