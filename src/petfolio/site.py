"""Wiring of every store over one key-value store."""

from dataclasses import dataclass, field

from .config import get_db_path, get_image_max_edge, get_image_quality
from .logging_config import get_logger
from .services.auth import AuthGate
from .services.image_pipeline import ImagePipeline
from .services.upload import UploadTransport, get_upload_transport
from .storage import KeyValueStore
from .stores import AnimeContentStore, GalleryStore, PageContentStore, PetStore, PostStore

logger = get_logger(__name__)


@dataclass
class Site:
    """All content of one site profile, hydrated at construction."""

    kv: KeyValueStore
    pipeline: ImagePipeline = field(default_factory=ImagePipeline)
    transport: UploadTransport | None = None

    def __post_init__(self) -> None:
        self.auth = AuthGate(self.kv)
        self.pets = PetStore(self.kv)
        self.gallery = GalleryStore(self.kv)
        self.posts = PostStore(self.kv)
        self.page = PageContentStore(self.kv)
        self.anime = AnimeContentStore(self.kv)
        logger.info(
            "site_loaded",
            db_path=self.kv.db_path,
            pets=len(self.pets),
            gallery_images=len(self.gallery),
            posts=len(self.posts),
        )

    def close(self) -> None:
        self.kv.close()


def open_site(db_path: str | None = None) -> Site:
    """
    Open the site stored at ``db_path`` using configured image settings.

    Args:
        db_path: DuckDB file, defaults to the PETFOLIO_DB_PATH setting
    """
    pipeline = ImagePipeline(max_edge=get_image_max_edge(), quality=get_image_quality())
    return Site(
        kv=KeyValueStore(db_path or get_db_path()),
        pipeline=pipeline,
        transport=get_upload_transport(),
    )
