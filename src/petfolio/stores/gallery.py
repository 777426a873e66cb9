"""Gallery images collection store."""

from typing import Any

from ..errors import ValidationError
from ..models.gallery import GalleryCategory, GalleryImage, parse_category
from ..services.auth import require_owner
from ..services.gallery_filter import filter_by_category
from ..services.image_pipeline import ImagePipeline
from ..storage import GALLERY_IMAGES_KEY
from .base import CollectionStore


class GalleryStore(CollectionStore[GalleryImage]):
    """CRUD over gallery images, embedded inline after downscaling."""

    key = GALLERY_IMAGES_KEY
    entity_name = "gallery_image"
    patchable_fields = frozenset({"url", "caption", "category"})

    def _from_dict(self, data: dict[str, Any]) -> GalleryImage:
        return GalleryImage.from_dict(data)

    def _validate(self, item: GalleryImage) -> None:
        if not item.url:
            raise ValidationError("Gallery image has no image", code="gallery_image_missing_url")

    def _coerce_patch(self, patch: dict[str, Any]) -> dict[str, Any]:
        if "category" in patch:
            patch["category"] = self._category(patch["category"])
        return patch

    @staticmethod
    def _category(value: "str | GalleryCategory") -> GalleryCategory:
        try:
            return parse_category(value)
        except ValueError as e:
            raise ValidationError(
                f"Images must be filed under a stored category, got {value!r}",
                code="invalid_category",
                details={"category": str(value)},
                original_exception=e,
            ) from e

    def create(self, url: str, caption: str, category: "str | GalleryCategory", authorized: bool) -> GalleryImage:
        """
        Add an image that already has a reference.

        Raises:
            PermissionDeniedError: Without the owner capability
            ValidationError: For a missing reference or a non-stored category
        """
        require_owner(authorized, "create gallery_image")
        image = GalleryImage.create_new(url=url, caption=caption, category=self._category(category))
        return self._insert(image, authorized)

    def add_upload(
        self,
        data: bytes,
        caption: str,
        category: "str | GalleryCategory",
        authorized: bool,
        pipeline: ImagePipeline | None = None,
    ) -> GalleryImage:
        """
        Downscale and re-encode raw image bytes, then add them inline.

        Raises:
            PermissionDeniedError: Without the owner capability
            ImageProcessingError: If the bytes cannot be decoded
        """
        require_owner(authorized, "create gallery_image")
        encoded = (pipeline or ImagePipeline()).process(data)
        return self.create(encoded.data_uri, caption, category, authorized)

    def by_category(self, category: "str | GalleryCategory") -> list[GalleryImage]:
        """Images for a gallery tab, "all" included."""
        return filter_by_category(self._items, category)
