"""
Frame Decoder
=============

Dedicated module for turning scanned QR strings into Frames, and back.

Wire Format:
    <1-char version><2-char hex page><payload text>

    "100{...}"  -> Frame(version="1", page=0, payload=b"{...}")
    "10Aabc"    -> Frame(version="1", page=10, payload=b"abc")

Design Rules:
    - This is the ONLY place in the codebase that parses frame headers
    - Versions are checked against an explicit allow-list, not a range
    - Fails fast with a FrameError; never touches transfer state
"""

import logging
import string
from typing import Iterable, Optional

from account_transfer.config import settings
from account_transfer.errors import (
    FrameEncodingError,
    MalformedPageError,
    UnsupportedVersionError,
)
from account_transfer.scanning.frame import Frame


logger = logging.getLogger(__name__)


HEADER_LENGTH = 3
MAX_PAGE = 0xFF

_HEX_DIGITS = frozenset(string.hexdigits)


def decode_frame(
    raw_text: str,
    supported_versions: Optional[Iterable[str]] = None,
) -> Frame:
    """
    Decode one scanned QR string into a Frame.

    Args:
        raw_text: Text read from a single QR code
        supported_versions: Allow-list of version tags. Defaults to
            settings.transfer.supported_versions.

    Returns:
        Frame with version, page and UTF-8 payload bytes

    Raises:
        UnsupportedVersionError: If the version tag is not allowed
        MalformedPageError: If the input is empty or the page field is
            missing or not hexadecimal
        FrameEncodingError: If the payload cannot be encoded as UTF-8
    """
    if not raw_text:
        raise MalformedPageError("Empty frame payload")

    allowed = frozenset(
        supported_versions if supported_versions is not None
        else settings.transfer.supported_versions
    )

    version = raw_text[0]
    if version not in allowed:
        raise UnsupportedVersionError(version)

    page_field = raw_text[1:HEADER_LENGTH]
    if len(page_field) < 2:
        raise MalformedPageError("Frame is too short to contain a page number")
    # int(x, 16) also accepts signs, whitespace and underscores
    if not all(ch in _HEX_DIGITS for ch in page_field):
        raise MalformedPageError(f"Invalid page field: {page_field!r}")
    page = int(page_field, 16)

    try:
        payload = raw_text[HEADER_LENGTH:].encode("utf-8")
    except UnicodeEncodeError as e:
        raise FrameEncodingError(f"Payload of page {page} is not encodable as UTF-8: {e.reason}")

    frame = Frame(version=version, page=page, payload=payload)
    logger.debug(f"Decoded {frame!r}")
    return frame


def encode_frame(version: str, page: int, payload: bytes) -> str:
    """
    Encode a frame into the text placed in a QR code.

    Inverse of decode_frame, used by the exporting side.

    Args:
        version: One-character version tag
        page: Page number in 0..255
        payload: UTF-8 payload bytes

    Returns:
        Scannable frame text

    Raises:
        ValueError: If version or page are out of range, or the payload
            is not valid UTF-8
    """
    if len(version) != 1:
        raise ValueError(f"Version tag must be one character, got {version!r}")
    if not 0 <= page <= MAX_PAGE:
        raise ValueError(f"Page must be in 0..{MAX_PAGE}, got {page}")

    return f"{version}{page:02X}{payload.decode('utf-8')}"
