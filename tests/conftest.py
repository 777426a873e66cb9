"""
Pytest configuration and fixtures for petfolio tests.
"""

import io
from collections.abc import Generator

import pytest
from PIL import Image

from petfolio.config import get_config
from petfolio.storage import KeyValueStore


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Set up test environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("UPLOAD_ENDPOINT", raising=False)
    monkeypatch.delenv("IMAGE_MAX_EDGE", raising=False)
    monkeypatch.delenv("IMAGE_QUALITY", raising=False)
    get_config().clear_cache()
    yield
    get_config().clear_cache()


@pytest.fixture
def kv() -> Generator[KeyValueStore, None, None]:
    """In-memory key-value store."""
    store = KeyValueStore(":memory:")
    yield store
    store.close()


def create_test_image(size=(100, 100), color="red", format_type="JPEG", mode="RGB") -> bytes:
    """Create a test image in memory."""
    image = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    image.save(buffer, format=format_type)
    return buffer.getvalue()


@pytest.fixture
def image_factory():
    """Factory for encoded test images."""
    return create_test_image


@pytest.fixture
def quadrant_image() -> bytes:
    """
    400x400 PNG split into four solid quadrants.

    Top-left red, top-right green, bottom-left blue, bottom-right white.
    """
    image = Image.new("RGB", (400, 400), color="white")
    image.paste((255, 0, 0), (0, 0, 200, 200))
    image.paste((0, 255, 0), (200, 0, 400, 200))
    image.paste((0, 0, 255), (0, 200, 200, 400))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
