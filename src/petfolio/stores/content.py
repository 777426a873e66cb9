"""Singleton stores for the home/bio page text and the anime page."""

from ..errors import EntityNotFoundError
from ..logging_config import log_user_action
from ..models.content import AnimeContent, PageContent
from ..services.auth import require_owner
from ..storage import ANIME_CONTENT_KEY, PAGE_CONTENT_KEY
from .base import SingletonStore


class PageContentStore(SingletonStore[PageContent]):
    """Home text, bio, socials and home page images."""

    key = PAGE_CONTENT_KEY
    model = PageContent

    def add_home_image(self, url: str, authorized: bool) -> PageContent:
        """Append a home page image; blank references are ignored."""
        require_owner(authorized, "add home image")
        if not url.strip():
            return self.get()
        content = self.get()
        content.home_images.append(url.strip())
        updated = self._commit(content)
        log_user_action("home_image_added", count=len(updated.home_images))
        return updated

    def remove_home_image(self, index: int, authorized: bool) -> PageContent:
        """
        Drop the home page image at ``index``.

        Raises:
            EntityNotFoundError: If there is no image at ``index``
        """
        require_owner(authorized, "remove home image")
        content = self.get()
        if not 0 <= index < len(content.home_images):
            raise EntityNotFoundError(
                f"No home image at position {index}",
                details={"index": index, "count": len(content.home_images)},
            )
        del content.home_images[index]
        updated = self._commit(content)
        log_user_action("home_image_removed", index=index)
        return updated


class AnimeContentStore(SingletonStore[AnimeContent]):
    """Title, description and images of the anime showcase."""

    key = ANIME_CONTENT_KEY
    model = AnimeContent
