"""
Unit tests for the owner maintenance tasks.
"""

import json

import pytest
from invoke import Context

from petfolio.cli import tasks
from petfolio.models.pet import PetDraft
from petfolio.services.image_pipeline import CropRect
from petfolio.site import open_site


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "site.duckdb")


@pytest.fixture
def image_file(tmp_path, image_factory):
    path = tmp_path / "drawing.png"
    path.write_bytes(image_factory((1600, 800), format_type="PNG"))
    return str(path)


def read_site(db):
    site = open_site(db)
    try:
        return site.auth.is_owner, site.gallery.list(), site.pets.list()
    finally:
        site.close()


class TestParseCrop:
    """Test cases for parse_crop."""

    def test_parse(self):
        assert tasks.parse_crop("10,10,50,50") == CropRect(10.0, 10.0, 50.0, 50.0, unit="%")

    def test_empty(self):
        assert tasks.parse_crop(None) is None
        assert tasks.parse_crop("") is None

    def test_wrong_arity(self):
        with pytest.raises(ValueError):
            tasks.parse_crop("10,10")


class TestTasks:
    """Test cases for invoke tasks."""

    def test_login_and_logout(self, db):
        tasks.login(Context(), db=db)
        assert read_site(db)[0] is True

        tasks.logout(Context(), db=db)
        assert read_site(db)[0] is False

    def test_import_image(self, db, image_file):
        tasks.login(Context(), db=db)

        tasks.import_image(Context(), image_file, caption="Sketch", category="bambi", db=db)

        _, gallery, _ = read_site(db)
        assert len(gallery) == 1
        assert gallery[0].caption == "Sketch"
        assert gallery[0].url.startswith("data:image/jpeg;base64,")

    def test_import_image_with_crop(self, db, image_file):
        tasks.login(Context(), db=db)

        tasks.import_image(Context(), image_file, crop="0,0,50,100", db=db)

        _, gallery, _ = read_site(db)
        assert len(gallery) == 1
        assert gallery[0].category.value == "my-art"

    def test_import_image_requires_login(self, db, image_file):
        tasks.import_image(Context(), image_file, caption="Sketch", db=db)

        assert read_site(db)[1] == []

    def test_import_unreadable_image(self, db, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("not an image")
        tasks.login(Context(), db=db)

        tasks.import_image(Context(), str(path), db=db)

        assert read_site(db)[1] == []

    def test_remove_image(self, db, image_file):
        tasks.login(Context(), db=db)
        tasks.import_image(Context(), image_file, db=db)
        image_id = read_site(db)[1][0].id

        tasks.remove_image(Context(), image_id, db=db)

        assert read_site(db)[1] == []

    def test_remove_unknown_image(self, db):
        tasks.login(Context(), db=db)

        tasks.remove_image(Context(), "missing", db=db)

        assert read_site(db)[1] == []

    def test_set_pet_image(self, db, image_file):
        site = open_site(db)
        site.auth.login()
        pet = site.pets.create(
            PetDraft(name="Bambi", breed="Cat", description="Naps", fun_facts=["Purrs"]), authorized=True
        )
        site.close()

        tasks.set_pet_image(Context(), pet.id, image_file, db=db)

        pets = read_site(db)[2]
        assert pets[0].image.startswith("data:image/jpeg;base64,")
        assert pets[0].name == "Bambi"

    def test_list_collection(self, db, capsys):
        site = open_site(db)
        site.posts.create("Hello", "Body", "Intro", authorized=True, post_date="2024-05-01")
        site.close()
        capsys.readouterr()

        tasks.list_collection(Context(), "posts", db=db)

        payload = json.loads(capsys.readouterr().out)
        assert [post["title"] for post in payload] == ["Hello"]

    def test_list_page_document(self, db, capsys):
        tasks.list_collection(Context(), "page", db=db)

        payload = json.loads(capsys.readouterr().out)
        assert payload == {"home": "", "bio": "", "socials": "", "homeImages": []}

    def test_list_unknown_collection(self, db, capsys):
        tasks.list_collection(Context(), "secrets", db=db)

        assert capsys.readouterr().out == ""
