"""
Unit tests for upload transports and the upload endpoint handler.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from petfolio.errors import UploadError
from petfolio.services.data_uri import decode_data_uri
from petfolio.services.upload import (
    HttpUploadTransport,
    InlineUploadTransport,
    get_upload_transport,
    handle_upload_request,
)


def make_response(status_code=200, body=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


class TestHandleUploadRequest:
    """Test cases for the upload endpoint handler."""

    def test_missing_file(self):
        assert handle_upload_request(None, None) == (400, "No file uploaded")

    def test_empty_file(self):
        assert handle_upload_request(b"", "image/png") == (400, "No file uploaded")

    def test_success_echoes_inline_reference(self):
        status, body = handle_upload_request(b"\x89PNG", "image/png")

        assert status == 200
        assert decode_data_uri(body["imageUrl"]) == ("image/png", b"\x89PNG")

    def test_unknown_content_type(self):
        status, body = handle_upload_request(b"abc", None)

        assert status == 200
        assert body["imageUrl"].startswith("data:application/octet-stream;base64,")

    def test_encode_failure(self):
        with patch("petfolio.services.upload.encode_data_uri", side_effect=ValueError("boom")):
            assert handle_upload_request(b"abc", "image/png") == (500, "Error uploading file")


class TestInlineUploadTransport:
    """Test cases for InlineUploadTransport."""

    def test_upload(self):
        reference = InlineUploadTransport().upload(b"jpeg", "pet.jpg", "image/jpeg")

        assert decode_data_uri(reference) == ("image/jpeg", b"jpeg")

    def test_upload_empty_payload(self):
        with pytest.raises(UploadError) as exc_info:
            InlineUploadTransport().upload(b"", "pet.jpg", "image/jpeg")

        assert exc_info.value.code == "upload_bad_status"
        assert exc_info.value.details["status"] == 400


class TestHttpUploadTransport:
    """Test cases for HttpUploadTransport."""

    def setup_method(self):
        """Set up test fixtures."""
        self.session = MagicMock()
        self.transport = HttpUploadTransport("https://example.com/api/upload", session=self.session)

    def test_upload_posts_multipart_file(self):
        """The file goes in the ``file`` field with no timeout by default."""
        self.session.post.return_value = make_response(body={"imageUrl": "https://cdn.example.com/a.jpg"})

        reference = self.transport.upload(b"jpeg", "a.jpg", "image/jpeg")

        assert reference == "https://cdn.example.com/a.jpg"
        self.session.post.assert_called_once_with(
            "https://example.com/api/upload",
            files={"file": ("a.jpg", b"jpeg", "image/jpeg")},
            timeout=None,
        )

    def test_timeout_is_passed_through(self):
        transport = HttpUploadTransport("https://example.com/api/upload", session=self.session, timeout=5)
        self.session.post.return_value = make_response(body={"imageUrl": "x"})

        transport.upload(b"jpeg", "a.jpg", "image/jpeg")

        assert self.session.post.call_args.kwargs["timeout"] == 5

    def test_error_status(self):
        self.session.post.return_value = make_response(status_code=500)

        with pytest.raises(UploadError) as exc_info:
            self.transport.upload(b"jpeg", "a.jpg", "image/jpeg")

        assert exc_info.value.code == "upload_bad_status"
        assert exc_info.value.details == {"status": 500}

    def test_body_without_image_url(self):
        self.session.post.return_value = make_response(body={"url": "https://cdn.example.com/a.jpg"})

        with pytest.raises(UploadError) as exc_info:
            self.transport.upload(b"jpeg", "a.jpg", "image/jpeg")

        assert exc_info.value.code == "upload_bad_body"

    def test_body_not_json(self):
        self.session.post.return_value = make_response(json_error=ValueError("not json"))

        with pytest.raises(UploadError) as exc_info:
            self.transport.upload(b"jpeg", "a.jpg", "image/jpeg")

        assert exc_info.value.code == "upload_bad_body"

    def test_network_error(self):
        self.session.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(UploadError) as exc_info:
            self.transport.upload(b"jpeg", "a.jpg", "image/jpeg")

        assert exc_info.value.code == "upload_network_error"
        assert isinstance(exc_info.value.original_exception, requests.ConnectionError)

    def test_default_session(self):
        transport = HttpUploadTransport("https://example.com/api/upload")

        assert isinstance(transport.session, requests.Session)


class TestGetUploadTransport:
    """Test cases for transport selection."""

    def test_inline_without_endpoint(self):
        assert isinstance(get_upload_transport(), InlineUploadTransport)

    def test_explicit_endpoint(self):
        transport = get_upload_transport("https://example.com/api/upload")

        assert isinstance(transport, HttpUploadTransport)
        assert transport.endpoint == "https://example.com/api/upload"

    def test_configured_endpoint(self, monkeypatch):
        monkeypatch.setenv("UPLOAD_ENDPOINT", "https://uploads.example.com")

        transport = get_upload_transport()

        assert isinstance(transport, HttpUploadTransport)
        assert transport.endpoint == "https://uploads.example.com"
