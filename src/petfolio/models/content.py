"""
Singleton page documents for petfolio.

PageContent feeds the home and bio pages; AnimeContent feeds the anime
showcase. Both are update-only and tolerate partial stored documents.
"""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_ANIME_TITLE = "My Anime Collection"
DEFAULT_ANIME_DESCRIPTION = (
    "Welcome to my anime and manga showcase! Here you'll find some of my favorite characters and series."
)


@dataclass
class PageContent:
    """Home page text, bio, contact block and home page images."""

    home: str = ""
    bio: str = ""
    socials: str = ""
    home_images: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "home": self.home,
            "bio": self.bio,
            "socials": self.socials,
            "homeImages": list(self.home_images),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PageContent":
        return cls(
            home=data.get("home") or "",
            bio=data.get("bio") or "",
            socials=data.get("socials") or "",
            home_images=[str(url) for url in data.get("homeImages") or []],
        )


@dataclass
class AnimeContent:
    """Title, blurb and orbiting images of the anime page."""

    title: str = DEFAULT_ANIME_TITLE
    description: str = DEFAULT_ANIME_DESCRIPTION
    images: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "images": list(self.images),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnimeContent":
        return cls(
            title=data.get("title") or DEFAULT_ANIME_TITLE,
            description=data.get("description") or DEFAULT_ANIME_DESCRIPTION,
            images=[str(src) for src in data.get("images") or []],
        )

    def display_images(self) -> list[str]:
        """Image sources with the "@" alias prefix stripped."""
        return [src[1:] if src.startswith("@") else src for src in self.images]
