"""
Entity stores for petfolio.

Each store owns one document in the key-value store:
- PetStore, GalleryStore, PostStore: ordered collections
- PageContentStore, AnimeContentStore: update-only singletons
"""

from .base import CollectionStore, SingletonStore
from .content import AnimeContentStore, PageContentStore
from .gallery import GalleryStore
from .pets import PetStore
from .posts import PostStore

__all__ = [
    "AnimeContentStore",
    "CollectionStore",
    "GalleryStore",
    "PageContentStore",
    "PetStore",
    "PostStore",
    "SingletonStore",
]
