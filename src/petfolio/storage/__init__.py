"""
Storage module for petfolio.

- KeyValueStore: JSON documents per key, persisted in DuckDB
- Namespace keys for every content document
"""

from .keys import (
    ALL_KEYS,
    ANIME_CONTENT_KEY,
    AUTH_KEY,
    BLOG_POSTS_KEY,
    GALLERY_IMAGES_KEY,
    PAGE_CONTENT_KEY,
    PETS_KEY,
)
from .kv_store import KeyValueStore

__all__ = [
    "KeyValueStore",
    "ALL_KEYS",
    "ANIME_CONTENT_KEY",
    "AUTH_KEY",
    "BLOG_POSTS_KEY",
    "GALLERY_IMAGES_KEY",
    "PAGE_CONTENT_KEY",
    "PETS_KEY",
]
