"""
Account Reconstructor
=====================

Reassembles collected data frames and verifies them before trusting them.

Pipeline:
    1. Order frames by page and check they are exactly 1..N
    2. Concatenate payloads into one buffer
    3. SHA-512 the buffer, compare with the declared hash in constant time
    4. Only on match, parse the buffer as the account JSON

Design Rules:
    - The buffer is never logged and never returned on failure
    - Digest comparison does not short-circuit on the first differing byte
    - A matching hash with unusable JSON is a protocol error, distinct
      from an integrity error
"""

import hashlib
import logging
from typing import Iterable

from cryptography.hazmat.primitives import constant_time
from pydantic import ValidationError

from account_transfer.errors import (
    IntegrityMismatchError,
    InvalidAccountPayloadError,
    PageCountMismatchError,
)
from account_transfer.models.account import AccountRecord
from account_transfer.scanning.frame import Frame


logger = logging.getLogger(__name__)


def payload_digest(data: bytes) -> str:
    """Lowercase hex SHA-512 of data."""
    return hashlib.sha512(data).hexdigest()


def digests_match(computed: str, expected: str) -> bool:
    """
    Compare two hex digests without leaking where they differ.

    The expected value comes from the scanned configuration and is
    lowercased first; the comparison itself is constant time.
    """
    return constant_time.bytes_eq(
        computed.encode("ascii"),
        expected.lower().encode("ascii", errors="replace"),
    )


def finalize_account(frames: Iterable[Frame], expected_hash: str) -> AccountRecord:
    """
    Reassemble, verify and decode the account payload.

    Args:
        frames: Collected data frames (pages 1..N), any order
        expected_hash: Hex SHA-512 declared by the configuration page

    Returns:
        AccountRecord built from the verified payload

    Raises:
        PageCountMismatchError: If pages are not exactly 1..N
        IntegrityMismatchError: If the digest does not match
        InvalidAccountPayloadError: If the verified payload is not a valid
            account JSON object
    """
    ordered = sorted(frames, key=lambda frame: frame.page)
    pages = [frame.page for frame in ordered]
    if not pages or pages != list(range(1, len(pages) + 1)):
        raise PageCountMismatchError(
            f"Collected pages are not contiguous from 1: got {len(pages)} page(s)"
        )

    buffer = b"".join(frame.payload for frame in ordered)

    if not digests_match(payload_digest(buffer), expected_hash):
        logger.warning(f"Integrity check failed for {len(pages)} reassembled page(s)")
        raise IntegrityMismatchError("Reassembled payload does not match the declared hash")

    try:
        account = AccountRecord.model_validate_json(buffer)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors()})
        raise InvalidAccountPayloadError(
            f"Verified payload is not a valid account record ({', '.join(fields)})"
        )

    logger.info(f"Account payload verified and decoded from {len(pages)} page(s)")
    return account
