"""
Image ingestion pipeline for petfolio.

Raw uploads are decoded, downscaled so the longer edge is at most
``max_edge`` pixels and re-encoded as lossy JPEG. An optional crop is taken
from the full-resolution decode, never from the downscaled preview, and the
result becomes the image reference stored on an entity.

All pixel work goes through an ImageCodec so the sizing and crop math does
not depend on Pillow.
"""

import io
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import DEFAULT_IMAGE_MAX_EDGE, DEFAULT_IMAGE_QUALITY
from ..errors import ErrorInfo, ImageProcessingError, PetfolioError, UploadError, handle_error
from ..logging_config import get_logger, log_error, log_performance
from .data_uri import decode_data_uri, encode_data_uri, is_data_uri

try:
    from pillow_heif import register_heif_opener  # type: ignore[import-untyped]

    register_heif_opener()
    HEIF_AVAILABLE = True
except ImportError:
    HEIF_AVAILABLE = False

logger = get_logger(__name__)

JPEG_MIME_TYPE = "image/jpeg"


class ImageCodec(Protocol):
    """Pixel backend used by the pipeline."""

    mime_type: str

    def decode(self, data: bytes) -> Any: ...

    def encode(self, surface: Any, quality: float) -> bytes: ...

    def size(self, surface: Any) -> tuple[int, int]: ...

    def resize(self, surface: Any, size: tuple[int, int]) -> Any: ...

    def crop(self, surface: Any, box: tuple[int, int, int, int]) -> Any: ...


class PillowCodec:
    """ImageCodec backed by Pillow, producing JPEG output."""

    mime_type = JPEG_MIME_TYPE

    def decode(self, data: bytes) -> Image.Image:
        """
        Decode raw bytes into an RGB or greyscale image.

        Raises:
            ImageProcessingError: If the bytes are not a readable image
        """
        try:
            with Image.open(io.BytesIO(data)) as opened:
                opened.load()
                # Apply EXIF orientation to correct rotation
                image = ImageOps.exif_transpose(opened)
                if image.mode not in ("RGB", "L"):
                    image = image.convert("RGB")
                return image.copy()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise ImageProcessingError(
                f"Failed to decode image: {e}",
                code="image_decode_failed",
                details={"file_size": len(data)},
                original_exception=e,
            ) from e

    def encode(self, surface: Image.Image, quality: float) -> bytes:
        buffer = io.BytesIO()
        surface.save(buffer, format="JPEG", quality=int(round(quality * 100)), optimize=True)
        return buffer.getvalue()

    def size(self, surface: Image.Image) -> tuple[int, int]:
        return surface.size

    def resize(self, surface: Image.Image, size: tuple[int, int]) -> Image.Image:
        return surface.resize(size, Image.Resampling.LANCZOS)

    def crop(self, surface: Image.Image, box: tuple[int, int, int, int]) -> Image.Image:
        return surface.crop(box)


def calculate_target_size(width: int, height: int, max_edge: int = DEFAULT_IMAGE_MAX_EDGE) -> tuple[int, int]:
    """
    Constrain the longer edge to ``max_edge`` while preserving aspect ratio.

    Images already within bounds keep their size; nothing is upscaled.
    Fractional results are truncated the way a raster canvas truncates them.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        max_edge: Maximum length of the longer edge

    Returns:
        tuple: Target size as (width, height)
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    new_width, new_height = float(width), float(height)
    if width >= height:
        if width > max_edge:
            new_height = height * max_edge / width
            new_width = max_edge
    elif height > max_edge:
        new_width = width * max_edge / height
        new_height = max_edge

    return max(1, int(new_width)), max(1, int(new_height))


@dataclass(frozen=True)
class CropRect:
    """
    Crop selection relative to the image as displayed.

    ``unit`` is "%" (percent of the displayed size) or "px" (displayed pixels).
    """

    x: float
    y: float
    width: float
    height: float
    unit: str = "%"

    def to_display_pixels(self, display_size: tuple[float, float]) -> "CropRect":
        """Express the selection in displayed pixels."""
        if self.unit == "px":
            return self
        if self.unit != "%":
            raise ValueError(f"Unknown crop unit: {self.unit!r}")

        display_width, display_height = display_size
        return CropRect(
            x=self.x * display_width / 100,
            y=self.y * display_height / 100,
            width=self.width * display_width / 100,
            height=self.height * display_height / 100,
            unit="px",
        )

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def scale_crop_to_natural(
    crop: CropRect, natural_size: tuple[int, int], display_size: tuple[float, float]
) -> tuple[float, float, float, float]:
    """
    Map a displayed-image selection onto the natural-resolution image.

    Args:
        crop: Selection relative to the displayed image
        natural_size: Size of the decoded source image
        display_size: Size the image was shown at when selected

    Returns:
        tuple: (left, top, width, height) in natural pixels
    """
    display_width, display_height = display_size
    if display_width <= 0 or display_height <= 0:
        raise ValueError(f"Display size must be positive, got {display_width}x{display_height}")

    pixels = crop.to_display_pixels(display_size)
    scale_x = natural_size[0] / display_width
    scale_y = natural_size[1] / display_height

    return (pixels.x * scale_x, pixels.y * scale_y, pixels.width * scale_x, pixels.height * scale_y)


@dataclass(frozen=True)
class EncodedImage:
    """Result of a pipeline encode."""

    data: bytes
    width: int
    height: int
    mime_type: str = JPEG_MIME_TYPE

    @property
    def data_uri(self) -> str:
        return encode_data_uri(self.data, self.mime_type)


class ImagePipeline:
    """Decode, bound, crop and re-encode images."""

    def __init__(
        self,
        codec: ImageCodec | None = None,
        max_edge: int = DEFAULT_IMAGE_MAX_EDGE,
        quality: float = DEFAULT_IMAGE_QUALITY,
    ) -> None:
        self.codec: ImageCodec = codec or PillowCodec()
        self.max_edge = max_edge
        self.quality = quality

        if not HEIF_AVAILABLE:
            logger.debug("heif_support_unavailable", message="Install pillow-heif for HEIC support")

    def decode(self, data: bytes) -> Any:
        """Decode raw bytes; raises ImageProcessingError on unreadable input."""
        if not data:
            raise ImageProcessingError("No image data", code="image_empty")
        return self.codec.decode(data)

    def downscale(self, surface: Any) -> Any:
        """Return ``surface`` bounded to ``max_edge``, unchanged if already small enough."""
        size = self.codec.size(surface)
        target = calculate_target_size(size[0], size[1], self.max_edge)
        if target == size:
            return surface
        return self.codec.resize(surface, target)

    def encode(self, surface: Any) -> EncodedImage:
        """
        Bound and re-encode ``surface`` at the configured quality.

        Raises:
            ImageProcessingError: If the codec cannot render or encode
        """
        start_time = datetime.now()
        try:
            bounded = self.downscale(surface)
            data = self.codec.encode(bounded, self.quality)
            width, height = self.codec.size(bounded)
        except ImageProcessingError:
            raise
        except (OSError, ValueError) as e:
            raise ImageProcessingError(
                f"Failed to encode image: {e}",
                code="image_encode_failed",
                original_exception=e,
            ) from e

        log_performance(
            "encode_image",
            (datetime.now() - start_time).total_seconds(),
            width=width,
            height=height,
            encoded_size=len(data),
            quality=self.quality,
        )
        return EncodedImage(data=data, width=width, height=height, mime_type=self.codec.mime_type)

    def process(self, data: bytes) -> EncodedImage:
        """Decode raw bytes and produce the bounded re-encode."""
        return self.encode(self.decode(data))

    def crop(self, source: Any, crop: CropRect, display_size: tuple[float, float]) -> EncodedImage | None:
        """
        Crop ``source`` at natural resolution and encode the region.

        Args:
            source: Full-resolution decoded image
            crop: Selection relative to the displayed image
            display_size: Size the image was displayed at

        Returns:
            EncodedImage of the region, or None if there is no source, the
            selection is empty, or the region cannot be rendered
        """
        if source is None:
            logger.warning("crop_without_source")
            return None

        if crop.is_empty:
            logger.warning("crop_empty_selection", crop=str(crop))
            return None

        try:
            natural_width, natural_height = self.codec.size(source)
            left, top, width, height = scale_crop_to_natural(crop, (natural_width, natural_height), display_size)
            box = (
                max(0, int(round(left))),
                max(0, int(round(top))),
                min(natural_width, int(round(left + width))),
                min(natural_height, int(round(top + height))),
            )
        except (ValueError, OverflowError) as e:
            # Non-finite coordinates cannot be rounded to pixels
            logger.warning("crop_rejected", crop=str(crop), reason=str(e))
            return None

        if box[2] <= box[0] or box[3] <= box[1]:
            logger.warning("crop_empty_region", crop=str(crop), box=box)
            return None

        try:
            region = self.codec.crop(source, box)
            return self.encode(region)
        except (ImageProcessingError, OSError, ValueError) as e:
            log_error(e, {"operation": "crop", "box": box})
            return None


class PipelineState(Enum):
    """Stages of an image editing session."""

    IDLE = "idle"
    SELECTED = "selected"
    DECODED = "decoded"
    CROPPING = "cropping"
    COMMITTED = "committed"


class ImageSession:
    """
    One image being picked, previewed, optionally cropped and committed.

    Every ``select`` returns a token; a decode for an older token is
    discarded when it finishes, so the latest selection always wins.
    """

    def __init__(self, pipeline: ImagePipeline | None = None) -> None:
        self.pipeline = pipeline or ImagePipeline()
        self.state = PipelineState.IDLE
        self.error: ErrorInfo | None = None
        self.result: str | None = None
        self.filename = ""
        self.cropped = False
        self._generation = 0
        self._raw: bytes | None = None
        self._source: Any = None
        self._preview: EncodedImage | None = None
        self._display_size: tuple[float, float] | None = None
        self._lock = threading.Lock()

    @property
    def token(self) -> int:
        """Token of the current selection."""
        return self._generation

    @property
    def preview(self) -> EncodedImage | None:
        return self._preview

    @property
    def preview_uri(self) -> str | None:
        return self._preview.data_uri if self._preview else None

    @property
    def has_selection(self) -> bool:
        return self.state is not PipelineState.IDLE

    def select(self, data: bytes, filename: str = "image") -> int:
        """
        Start a new selection, superseding any pending one.

        Returns:
            int: Token identifying this selection
        """
        with self._lock:
            self._generation += 1
            self._raw = data
            self._source = None
            self._preview = None
            self._display_size = None
            self.filename = filename
            self.cropped = False
            self.error = None
            self.result = None
            self.state = PipelineState.SELECTED
            logger.debug("image_selected", token=self._generation, filename=filename, size=len(data))
            return self._generation

    def select_reference(self, reference: str, filename: str = "image") -> int | None:
        """
        Select an already stored inline image for re-editing.

        Returns:
            int: Token of the selection, or None if the reference is not inline
        """
        if not is_data_uri(reference):
            self.error = handle_error(
                ImageProcessingError("Only inline images can be edited", code="remote_reference_not_editable")
            )
            return None
        try:
            _, data = decode_data_uri(reference)
        except PetfolioError as e:
            self.error = handle_error(e)
            return None
        return self.select(data, filename)

    def decode(self, token: int | None = None) -> bool:
        """
        Decode the selection and build its bounded preview.

        On failure the session stays SELECTED and ``error`` is set.

        Args:
            token: Selection to decode, defaults to the current one

        Returns:
            bool: True if the decode was applied
        """
        with self._lock:
            token = self._generation if token is None else token
            raw = self._raw if token == self._generation else None

        if raw is None:
            logger.info("stale_decode_discarded", token=token, current=self._generation)
            return False

        try:
            source = self.pipeline.decode(raw)
            preview = self.pipeline.encode(source)
        except ImageProcessingError as e:
            with self._lock:
                if token == self._generation:
                    self.error = handle_error(e, {"filename": self.filename})
            return False

        with self._lock:
            if token != self._generation:
                logger.info("stale_decode_discarded", token=token, current=self._generation)
                return False
            self._source = source
            self._preview = preview
            self.state = PipelineState.DECODED
            return True

    def decode_async(self, executor: Executor) -> "Future[bool]":
        """Decode the current selection on ``executor``."""
        return executor.submit(self.decode, self._generation)

    def begin_crop(self, display_size: tuple[float, float] | None = None) -> bool:
        """
        Enter cropping mode.

        Args:
            display_size: Size the preview is displayed at, defaults to the
                preview's own pixel size
        """
        if self.state is not PipelineState.DECODED or self._preview is None:
            return False
        self._display_size = display_size or (self._preview.width, self._preview.height)
        self.state = PipelineState.CROPPING
        return True

    def cancel_crop(self) -> None:
        if self.state is PipelineState.CROPPING:
            self.state = PipelineState.DECODED

    def apply_crop(self, crop: CropRect) -> str | None:
        """
        Crop the full-resolution source and replace the preview.

        A failed crop leaves the previous preview in place.

        Returns:
            str: Data URI of the cropped preview, or None if the crop failed
        """
        if self.state is not PipelineState.CROPPING or self._display_size is None:
            return None

        self.state = PipelineState.DECODED
        cropped = self.pipeline.crop(self._source, crop, self._display_size)
        if cropped is None:
            return None

        self._preview = cropped
        self.cropped = True
        logger.debug("image_cropped", width=cropped.width, height=cropped.height)
        return cropped.data_uri

    def commit(self, transport: Any = None) -> str | None:
        """
        Produce the final image reference.

        Args:
            transport: Optional UploadTransport; without one the preview is
                embedded inline

        Returns:
            str: The image reference, or None if nothing is ready to commit

        Raises:
            UploadError: If the transport fails; the session stays DECODED
        """
        if self.state is PipelineState.COMMITTED:
            return self.result
        if self.state is PipelineState.CROPPING:
            self.cancel_crop()
        if self.state is not PipelineState.DECODED or self._preview is None:
            return None

        if transport is None:
            reference = self._preview.data_uri
        else:
            try:
                reference = transport.upload(self._preview.data, self.filename, self._preview.mime_type)
            except UploadError as e:
                self.error = e.get_error_info()
                raise

        self.result = reference
        self.state = PipelineState.COMMITTED
        return reference

    def reset(self) -> None:
        """Return to IDLE, dropping any selection."""
        with self._lock:
            self._generation += 1
            self._raw = None
            self._source = None
            self._preview = None
            self._display_size = None
            self.cropped = False
            self.error = None
            self.result = None
            self.state = PipelineState.IDLE
