"""
Unit tests for inline data URI references.
"""

import pytest

from petfolio.errors import ValidationError
from petfolio.services.data_uri import decode_data_uri, encode_data_uri, is_data_uri


class TestDataUri:
    """Test cases for data URI helpers."""

    def test_encode(self):
        assert encode_data_uri(b"hi", "text/plain") == "data:text/plain;base64,aGk="

    def test_decode(self):
        assert decode_data_uri("data:image/png;base64,aGk=") == ("image/png", b"hi")

    def test_decode_without_mime_type(self):
        assert decode_data_uri("data:;base64,aGk=") == ("application/octet-stream", b"hi")

    @pytest.mark.parametrize(
        "reference, expected",
        [
            ("data:image/jpeg;base64,AAAA", True),
            ("https://example.com/a.jpg", False),
            ("", False),
            (None, False),
        ],
    )
    def test_is_data_uri(self, reference, expected):
        assert is_data_uri(reference) is expected

    def test_remote_reference_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_data_uri("https://example.com/a.jpg")

        assert exc_info.value.code == "not_data_uri"

    def test_non_base64_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_data_uri("data:text/plain,hello")

        assert exc_info.value.code == "unsupported_data_uri"

    def test_malformed_payload(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_data_uri("data:image/png;base64,@@@")

        assert exc_info.value.code == "malformed_data_uri"
