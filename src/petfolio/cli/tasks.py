"""
Owner maintenance tasks.

Run through the ``petfolio`` console script, e.g.::

    petfolio login
    petfolio import-image ./drawing.png --caption "Sketch" --category my-art --crop 10,10,80,80
    petfolio list-collection gallery
"""

import json
import sys
from pathlib import Path

import structlog
from invoke import Collection, Context, Program, task

from .. import __version__
from ..errors import PetfolioError
from ..logging_config import configure_structured_logging
from ..models.pet import PetDraft
from ..services.image_pipeline import CropRect, ImageSession, PipelineState
from ..services.pet_editor import commit_pet
from ..site import Site, open_site

logger = structlog.get_logger()

COLLECTIONS = ("pets", "gallery", "posts", "page", "anime")


def parse_crop(value: str | None) -> CropRect | None:
    """Parse "x,y,width,height" in percent of the image."""
    if not value:
        return None
    parts = [float(part) for part in value.split(",")]
    if len(parts) != 4:
        raise ValueError(f"Crop must be x,y,width,height, got {value!r}")
    return CropRect(*parts, unit="%")


def _open(db: str | None) -> Site:
    configure_structured_logging()
    return open_site(db)


def _load_session(site: Site, path: str, crop: str | None) -> ImageSession | None:
    session = ImageSession(site.pipeline)
    session.select(Path(path).read_bytes(), Path(path).name)
    if not session.decode():
        message = session.error.message if session.error else "unreadable image"
        logger.error("image_decode_failed", path=path, error=message)
        return None

    crop_rect = parse_crop(crop)
    if crop_rect is not None:
        session.begin_crop()
        if session.apply_crop(crop_rect) is None:
            logger.warning("crop_skipped", path=path, crop=crop)
    return session


@task
def login(c: Context, db: str | None = None) -> None:
    """Set the owner flag."""
    site = _open(db)
    site.auth.login()
    site.close()


@task
def logout(c: Context, db: str | None = None) -> None:
    """Clear the owner flag."""
    site = _open(db)
    site.auth.logout()
    site.close()


@task
def list_collection(c: Context, name: str, db: str | None = None) -> None:
    """Print one collection or page document as JSON."""
    configure_structured_logging()
    if name not in COLLECTIONS:
        logger.error("unknown_collection", name=name, choices=list(COLLECTIONS))
        return

    site = _open(db)
    store = getattr(site, name)
    if name in ("page", "anime"):
        payload = store.get().to_dict()
    else:
        payload = [item.to_dict() for item in store.list()]
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    site.close()


@task
def import_image(
    c: Context, path: str, caption: str = "", category: str = "my-art", crop: str | None = None, db: str | None = None
) -> None:
    """Add an image file to the gallery, downscaled and optionally cropped."""
    site = _open(db)
    try:
        session = _load_session(site, path, crop)
        if session is None:
            return
        image = site.gallery.create(session.commit(), caption, category, site.auth.is_owner)
        logger.info("gallery_image_imported", id=image.id, path=path, cropped=session.cropped)
    except PetfolioError as e:
        logger.error("gallery_import_failed", path=path, error=e.user_message)
    finally:
        site.close()


@task
def remove_image(c: Context, image_id: str, db: str | None = None) -> None:
    """Delete a gallery image."""
    site = _open(db)
    try:
        site.gallery.remove(image_id, site.auth.is_owner)
        logger.info("gallery_image_removed", id=image_id)
    except PetfolioError as e:
        logger.error("gallery_remove_failed", id=image_id, error=e.user_message)
    finally:
        site.close()


@task
def set_pet_image(c: Context, pet_id: str, path: str, crop: str | None = None, db: str | None = None) -> None:
    """Replace a pet's photo through the configured upload transport."""
    site = _open(db)
    try:
        session = _load_session(site, path, crop)
        if session is None or session.state is not PipelineState.DECODED:
            return
        draft = PetDraft.from_pet(site.pets.get(pet_id))
        pet = commit_pet(site.pets, draft, site.auth.is_owner, pet_id=pet_id, session=session, transport=site.transport)
        logger.info("pet_image_updated", id=pet.id, path=path)
    except PetfolioError as e:
        logger.error("pet_image_update_failed", id=pet_id, error=e.user_message)
    finally:
        site.close()


namespace = Collection.from_module(sys.modules[__name__])
program = Program(namespace=namespace, version=__version__)
