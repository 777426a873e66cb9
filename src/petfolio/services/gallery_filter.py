"""Category filtering for the gallery page."""

from collections.abc import Sequence

from ..errors import ValidationError
from ..models.gallery import ALL_CATEGORY, GalleryCategory, GalleryImage, parse_category


def filter_by_category(images: Sequence[GalleryImage], category: "str | GalleryCategory") -> list[GalleryImage]:
    """
    Images in ``category``, in their original order.

    Args:
        images: Gallery images in display order
        category: A stored category or the "all" tab

    Returns:
        list: Every image for "all", otherwise exact category matches

    Raises:
        ValidationError: If ``category`` is neither "all" nor a stored category
    """
    if category == ALL_CATEGORY:
        return list(images)

    try:
        wanted = parse_category(category)
    except ValueError as e:
        raise ValidationError(
            f"Unknown gallery category: {category!r}",
            code="unknown_category",
            details={"category": str(category)},
            original_exception=e,
        ) from e

    return [image for image in images if image.category is wanted]
