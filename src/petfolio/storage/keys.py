"""Namespace keys under which each document lives in the key-value store."""

PETS_KEY = "pets"
GALLERY_IMAGES_KEY = "gallery_images"
BLOG_POSTS_KEY = "blog_posts"
PAGE_CONTENT_KEY = "page_content"
ANIME_CONTENT_KEY = "anime_content"
AUTH_KEY = "isAuthenticated"

ALL_KEYS = (
    PETS_KEY,
    GALLERY_IMAGES_KEY,
    BLOG_POSTS_KEY,
    PAGE_CONTENT_KEY,
    ANIME_CONTENT_KEY,
    AUTH_KEY,
)
