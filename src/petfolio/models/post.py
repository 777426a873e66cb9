"""Blog post model for petfolio."""

from dataclasses import dataclass
from datetime import date
from typing import Any

from .ids import generate_id


def today_iso() -> str:
    """Today's date as YYYY-MM-DD."""
    return date.today().isoformat()


@dataclass
class BlogPost:
    """A blog post. ``date`` is an ISO calendar date string."""

    id: str
    title: str
    date: str
    content: str
    excerpt: str

    @classmethod
    def create_new(cls, title: str, content: str, excerpt: str, post_date: str | None = None) -> "BlogPost":
        """Create a post with a fresh id, dated today unless told otherwise."""
        return cls(
            id=generate_id(),
            title=title,
            date=post_date or today_iso(),
            content=content,
            excerpt=excerpt,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "content": self.content,
            "excerpt": self.excerpt,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BlogPost":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            date=data.get("date") or today_iso(),
            content=data.get("content", ""),
            excerpt=data.get("excerpt", ""),
        )

    def missing_fields(self) -> list[str]:
        """Names of required fields that are empty."""
        return [name for name in ("title", "excerpt", "content") if not getattr(self, name).strip()]

    def validate(self) -> bool:
        """
        Check the commit invariants.

        Returns:
            True if the id is set, required text is present and the date parses
        """
        if not self.id or self.missing_fields():
            return False
        try:
            date.fromisoformat(self.date)
        except ValueError:
            return False
        return True

    def published_on(self) -> date:
        """The post date as a date object."""
        return date.fromisoformat(self.date)

    def paragraphs(self) -> list[str]:
        """Content split on newlines, one entry per rendered paragraph."""
        return self.content.split("\n")
