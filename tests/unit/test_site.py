"""
Unit tests for site wiring.
"""

from petfolio.services.image_pipeline import ImagePipeline
from petfolio.services.upload import HttpUploadTransport, InlineUploadTransport
from petfolio.site import Site, open_site
from petfolio.storage import PETS_KEY


class TestSite:
    """Test cases for Site and open_site."""

    def test_stores_share_one_key_value_store(self, kv):
        site = Site(kv)

        site.auth.login()
        assert site.pets.kv is kv
        assert site.gallery.kv is kv
        assert site.page.kv is kv
        assert site.auth.is_owner is True

    def test_hydrates_existing_content(self, kv):
        kv.write(PETS_KEY, [{"id": "p1", "name": "Bambi", "breed": "Cat", "description": "d", "funFacts": ["f"]}])

        site = Site(kv)

        assert [pet.name for pet in site.pets.list()] == ["Bambi"]
        assert site.posts.list() == []
        assert site.page.get().home == ""

    def test_open_site_uses_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PETFOLIO_DB_PATH", str(tmp_path / "site.duckdb"))
        monkeypatch.setenv("IMAGE_MAX_EDGE", "400")

        site = open_site()
        try:
            assert site.kv.db_path == str(tmp_path / "site.duckdb")
            assert isinstance(site.pipeline, ImagePipeline)
            assert site.pipeline.max_edge == 400
            assert site.pipeline.quality == 0.7
            assert isinstance(site.transport, InlineUploadTransport)
        finally:
            site.close()

    def test_open_site_with_upload_endpoint(self, tmp_path, monkeypatch):
        monkeypatch.setenv("UPLOAD_ENDPOINT", "https://example.com/api/upload")

        site = open_site(str(tmp_path / "site.duckdb"))
        try:
            assert isinstance(site.transport, HttpUploadTransport)
        finally:
            site.close()

    def test_content_survives_reopen(self, tmp_path):
        db_path = str(tmp_path / "site.duckdb")
        site = open_site(db_path)
        site.posts.create("Hello", "Body", "Intro", authorized=True, post_date="2024-03-01")
        site.close()

        reopened = open_site(db_path)
        try:
            assert [post.title for post in reopened.posts.list()] == ["Hello"]
        finally:
            reopened.close()
