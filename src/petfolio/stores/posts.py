"""Blog posts collection store."""

from typing import Any

from ..errors import ValidationError
from ..models.post import BlogPost
from ..storage import BLOG_POSTS_KEY
from .base import CollectionStore


class PostStore(CollectionStore[BlogPost]):
    """CRUD over blog posts."""

    key = BLOG_POSTS_KEY
    entity_name = "post"
    patchable_fields = frozenset({"title", "date", "content", "excerpt"})

    def _from_dict(self, data: dict[str, Any]) -> BlogPost:
        return BlogPost.from_dict(data)

    def _validate(self, item: BlogPost) -> None:
        if not item.validate():
            raise ValidationError(
                "Post needs a title, an excerpt, content and an ISO date",
                code="post_incomplete",
                details={"missing_fields": item.missing_fields(), "date": item.date},
            )

    def create(
        self, title: str, content: str, excerpt: str, authorized: bool, post_date: str | None = None
    ) -> BlogPost:
        """
        Publish a new post, dated today unless ``post_date`` is given.

        Raises:
            PermissionDeniedError: Without the owner capability
            ValidationError: If a required field is empty
        """
        return self._insert(BlogPost.create_new(title, content, excerpt, post_date), authorized)
