"""Inline image references encoded as ``data:`` URIs."""

import base64
import binascii

from ..errors import ValidationError

DATA_URI_PREFIX = "data:"


def is_data_uri(reference: str | None) -> bool:
    """True if ``reference`` is a self-contained inline image."""
    return bool(reference) and reference.startswith(DATA_URI_PREFIX)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Embed ``data`` as a base64 ``data:`` URI."""
    return f"{DATA_URI_PREFIX}{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(reference: str) -> tuple[str, bytes]:
    """
    Split a base64 ``data:`` URI into its MIME type and payload.

    Raises:
        ValidationError: If ``reference`` is not a base64 data URI
    """
    if not is_data_uri(reference):
        raise ValidationError("Reference is not an inline data URI", code="not_data_uri")

    header, sep, payload = reference[len(DATA_URI_PREFIX):].partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValidationError("Only base64 data URIs are supported", code="unsupported_data_uri")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(
            f"Malformed base64 payload: {e}", code="malformed_data_uri", original_exception=e
        ) from e

    return header[: -len(";base64")] or "application/octet-stream", data
