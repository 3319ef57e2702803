"""
Frame Decoder Tests
===================

Tests for decode_frame / encode_frame.
"""

import pytest

from account_transfer.errors import (
    FrameEncodingError,
    FrameError,
    MalformedPageError,
    UnsupportedVersionError,
)
from account_transfer.models.error_codes import ErrorCode
from account_transfer.scanning import Frame, decode_frame, encode_frame


class TestDecodeFrame:
    """Tests for parsing scanned strings."""

    def test_configuration_frame(self):
        """Verify page 0 header and payload are split correctly."""
        frame = decode_frame('100{"total_pages":3}')

        assert frame == Frame(version="1", page=0, payload=b'{"total_pages":3}')
        assert frame.is_configuration

    def test_hex_page_numbers(self):
        """Verify the page field is hexadecimal in either case."""
        assert decode_frame("10Apayload").page == 10
        assert decode_frame("10apayload").page == 10
        assert decode_frame("2FFx").page == 255

    def test_empty_payload_after_header(self):
        """A bare header is a valid frame with an empty payload."""
        frame = decode_frame("201")
        assert frame.page == 1
        assert frame.payload == b""

    def test_non_ascii_payload_is_utf8_encoded(self):
        """Verify the payload is re-encoded as UTF-8 bytes."""
        frame = decode_frame("101zażółć")
        assert frame.payload == "zażółć".encode("utf-8")

    @pytest.mark.parametrize("version", ["1", "2"])
    @pytest.mark.parametrize("page", [0, 1, 15, 16, 127, 254, 255])
    def test_encode_decode_preserves_triple(self, version, page):
        """Verify encode_frame and decode_frame are inverses."""
        payload = b'{"armored_key":"-----BEGIN PGP"}'
        frame = decode_frame(encode_frame(version, page, payload))

        assert (frame.version, frame.page, frame.payload) == (version, page, payload)

    def test_repr_hides_payload(self):
        """Verify repr never includes payload content."""
        frame = decode_frame("101SECRET-KEY-MATERIAL")
        assert "SECRET" not in repr(frame)
        assert "payload_len=19" in repr(frame)


class TestDecodeFrameRejections:
    """Tests for invalid scanned strings."""

    @pytest.mark.parametrize("raw", ["", "1", "10"])
    def test_too_short(self, raw):
        """Inputs shorter than three characters are rejected."""
        with pytest.raises(MalformedPageError):
            decode_frame(raw)

    @pytest.mark.parametrize("raw", ["!InvalidVersionByte", "000{}", "301", "a01x"])
    def test_unsupported_version(self, raw):
        """Versions outside the allow-list are rejected."""
        with pytest.raises(UnsupportedVersionError) as exc_info:
            decode_frame(raw)

        assert exc_info.value.code == ErrorCode.UNSUPPORTED_VERSION
        assert exc_info.value.recoverable

    @pytest.mark.parametrize("raw", ["1!!InvalidPageBytes", "1G0x", "1 1x", "1+1x", "1-1x", "1_1x"])
    def test_non_hex_page(self, raw):
        """Page fields that are not two hex digits are rejected."""
        with pytest.raises(MalformedPageError):
            decode_frame(raw)

    def test_custom_allow_list(self):
        """Verify the allow-list can be extended without a range check."""
        assert decode_frame("301x", supported_versions=["1", "3"]).version == "3"
        with pytest.raises(UnsupportedVersionError):
            decode_frame("201x", supported_versions=["1", "3"])

    def test_unencodable_payload(self):
        """A lone surrogate cannot be encoded and is reported as such."""
        with pytest.raises(FrameEncodingError) as exc_info:
            decode_frame("101\ud800")

        assert exc_info.value.code == ErrorCode.ENCODING_ERROR

    def test_all_frame_errors_are_recoverable(self):
        """Frame-level errors share a recoverable base class."""
        for raw in ["", "!01", "1ZZ"]:
            with pytest.raises(FrameError) as exc_info:
                decode_frame(raw)
            assert exc_info.value.recoverable


class TestEncodeFrame:
    """Tests for frame encoding on the exporting side."""

    def test_uppercase_two_digit_page(self):
        assert encode_frame("1", 10, b"abc") == "10Aabc"
        assert encode_frame("1", 0, b"") == "100"

    @pytest.mark.parametrize("page", [-1, 256])
    def test_page_out_of_range(self, page):
        with pytest.raises(ValueError):
            encode_frame("1", page, b"")

    def test_version_must_be_one_character(self):
        with pytest.raises(ValueError):
            encode_frame("12", 1, b"")
