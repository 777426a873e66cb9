"""
Upload transport for petfolio.

An upload turns image bytes into a reference that can be stored on an
entity. The endpoint contract is a single POST carrying the file under the
multipart field ``file`` and answering ``{"imageUrl": "<reference>"}``.
"""

from typing import Any, Protocol

import requests

from ..config import get_upload_endpoint
from ..errors import UploadError
from ..logging_config import get_logger, log_user_action
from .data_uri import encode_data_uri

logger = get_logger(__name__)

UPLOAD_FIELD = "file"
IMAGE_URL_FIELD = "imageUrl"


class UploadTransport(Protocol):
    """Turns image bytes into an embeddable reference."""

    def upload(self, data: bytes, filename: str, content_type: str) -> str: ...


def handle_upload_request(data: bytes | None, content_type: str | None) -> tuple[int, dict[str, Any] | str]:
    """
    Server side of the upload endpoint.

    The file is echoed back inline as a base64 data URI.

    Args:
        data: Uploaded file bytes, None if the form had no file
        content_type: MIME type reported for the file

    Returns:
        tuple: (HTTP status, JSON body or plain-text error)
    """
    if not data:
        return 400, "No file uploaded"

    try:
        image_url = encode_data_uri(data, content_type or "application/octet-stream")
    except (TypeError, ValueError) as e:
        logger.error("upload_encode_failed", error=str(e))
        return 500, "Error uploading file"

    return 200, {IMAGE_URL_FIELD: image_url}


def _extract_image_url(status: int, body: Any) -> str:
    if status < 200 or status >= 300:
        raise UploadError(
            f"Upload endpoint answered with status {status}",
            code="upload_bad_status",
            details={"status": status},
        )
    if not isinstance(body, dict) or not isinstance(body.get(IMAGE_URL_FIELD), str) or not body[IMAGE_URL_FIELD]:
        raise UploadError("Upload response did not contain an image reference", code="upload_bad_body")
    return body[IMAGE_URL_FIELD]


class InlineUploadTransport:
    """Runs the upload endpoint in-process, producing inline references."""

    def upload(self, data: bytes, filename: str, content_type: str) -> str:
        status, body = handle_upload_request(data, content_type)
        image_url = _extract_image_url(status, body)
        log_user_action("image_uploaded", transport="inline", filename=filename, size=len(data))
        return image_url


class HttpUploadTransport:
    """Posts images to a remote upload endpoint. No retries are attempted."""

    def __init__(self, endpoint: str, session: requests.Session | None = None, timeout: float | None = None):
        """
        Args:
            endpoint: URL of the upload endpoint
            session: Optional requests session to reuse connections
            timeout: Optional request timeout in seconds, unbounded by default
        """
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.timeout = timeout

    def upload(self, data: bytes, filename: str, content_type: str) -> str:
        """
        Upload ``data`` and return the reference the endpoint hands back.

        Raises:
            UploadError: On network failure, non-success status or a body
                without an image reference
        """
        try:
            response = self.session.post(
                self.endpoint,
                files={UPLOAD_FIELD: (filename, data, content_type)},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UploadError(
                f"Failed to reach upload endpoint: {e}",
                code="upload_network_error",
                details={"endpoint": self.endpoint, "filename": filename},
                original_exception=e,
            ) from e

        body: Any = None
        if response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None

        image_url = _extract_image_url(response.status_code, body)
        log_user_action("image_uploaded", transport="http", filename=filename, size=len(data))
        return image_url


def get_upload_transport(endpoint: str | None = None) -> UploadTransport:
    """
    Pick the transport for the configured endpoint.

    Args:
        endpoint: Upload URL; defaults to the UPLOAD_ENDPOINT setting

    Returns:
        HttpUploadTransport when an endpoint is configured, else InlineUploadTransport
    """
    endpoint = endpoint or get_upload_endpoint()
    if endpoint:
        return HttpUploadTransport(endpoint)
    return InlineUploadTransport()
