"""
Services module for petfolio.

- ImagePipeline / ImageSession: decode, bound, crop and encode images
- Upload transports: inline and HTTP
- AuthGate: persisted owner flag
- filter_by_category: gallery tab filtering
- commit_pet: pet form commit with image resolution
"""

from .auth import AuthGate, require_owner
from .gallery_filter import filter_by_category
from .image_pipeline import (
    CropRect,
    EncodedImage,
    ImageCodec,
    ImagePipeline,
    ImageSession,
    PillowCodec,
    PipelineState,
    calculate_target_size,
    scale_crop_to_natural,
)
from .pet_editor import commit_pet, resolve_pet_image
from .upload import (
    HttpUploadTransport,
    InlineUploadTransport,
    UploadTransport,
    get_upload_transport,
    handle_upload_request,
)

__all__ = [
    "AuthGate",
    "CropRect",
    "EncodedImage",
    "HttpUploadTransport",
    "ImageCodec",
    "ImagePipeline",
    "ImageSession",
    "InlineUploadTransport",
    "PillowCodec",
    "PipelineState",
    "UploadTransport",
    "calculate_target_size",
    "commit_pet",
    "filter_by_category",
    "get_upload_transport",
    "handle_upload_request",
    "require_owner",
    "resolve_pet_image",
    "scale_crop_to_natural",
]
