"""
Unit tests for the DuckDB-backed key-value store.
"""

from unittest.mock import patch

import duckdb
import pytest

from petfolio.errors import StorageError
from petfolio.storage import KeyValueStore


class TestKeyValueStore:
    """Test cases for KeyValueStore."""

    def test_read_missing_key_returns_none(self, kv):
        """Absent keys read as None."""
        assert kv.read("pets") is None
        assert kv.read_raw("pets") is None

    def test_write_then_read(self, kv):
        """Values come back as the same JSON structure."""
        value = [{"id": "a", "funFacts": ["x", "y"]}, {"id": "b", "funFacts": []}]

        kv.write("pets", value)

        assert kv.read("pets") == value

    def test_write_overwrites(self, kv):
        """A second write replaces the first."""
        kv.write("page_content", {"home": "old"})
        kv.write("page_content", {"home": "new"})

        assert kv.read("page_content") == {"home": "new"}
        assert kv.keys() == ["page_content"]

    def test_unicode_preserved(self, kv):
        """Non-ASCII text round trips unchanged."""
        kv.write("blog_posts", [{"title": "Café ☕"}])

        assert kv.read("blog_posts")[0]["title"] == "Café ☕"
        assert "Café ☕" in kv.read_raw("blog_posts")

    def test_corrupt_json_reads_as_none(self, kv):
        """Malformed stored text is reported as absent instead of raising."""
        kv.write_raw("gallery_images", "{not json")

        assert kv.read("gallery_images") is None
        assert kv.read_raw("gallery_images") == "{not json"

    def test_remove(self, kv):
        """Removed keys read as None; removing twice is harmless."""
        kv.write("isAuthenticated", True)

        kv.remove("isAuthenticated")
        kv.remove("isAuthenticated")

        assert kv.read("isAuthenticated") is None
        assert kv.keys() == []

    def test_keys_are_independent(self, kv):
        """Each key holds its own document."""
        kv.write("pets", [])
        kv.write("blog_posts", [{"id": "1"}])

        assert kv.read("pets") == []
        assert kv.read("blog_posts") == [{"id": "1"}]
        assert kv.keys() == ["blog_posts", "pets"]

    def test_persists_across_connections(self, tmp_path):
        """Values written to a file survive reopening it."""
        db_path = str(tmp_path / "site.duckdb")

        with KeyValueStore(db_path) as first:
            first.write("page_content", {"bio": "hello"})

        with KeyValueStore(db_path) as second:
            assert second.read("page_content") == {"bio": "hello"}

    def test_connect_failure_raises_storage_error(self):
        """Failing to open the database is a StorageError."""
        store = KeyValueStore("/nonexistent-dir/site.duckdb")

        with patch("petfolio.storage.kv_store.duckdb.connect", side_effect=duckdb.IOException("no such dir")):
            with pytest.raises(StorageError, match="Failed to open key-value store"):
                store.read("pets")
