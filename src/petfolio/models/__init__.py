"""
Models module for petfolio.

This module contains the stored entity shapes:
- Pet and PetDraft: pets collection and its editing draft
- GalleryImage and GalleryCategory: gallery collection
- BlogPost: blog collection
- PageContent and AnimeContent: singleton page documents
- SupportTier: read-only support catalogue
"""

from .content import AnimeContent, PageContent
from .gallery import ALL_CATEGORY, CATEGORY_LABELS, GalleryCategory, GalleryImage, parse_category
from .ids import generate_id, generate_image_id
from .pet import Pet, PetDraft
from .post import BlogPost
from .support import SUPPORT_TIERS, SupportTier, find_tier

__all__ = [
    "ALL_CATEGORY",
    "CATEGORY_LABELS",
    "AnimeContent",
    "BlogPost",
    "GalleryCategory",
    "GalleryImage",
    "PageContent",
    "Pet",
    "PetDraft",
    "SUPPORT_TIERS",
    "SupportTier",
    "find_tier",
    "generate_id",
    "generate_image_id",
    "parse_category",
]
