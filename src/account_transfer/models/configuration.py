"""
Transfer Configuration Model
============================

Pydantic model for the metadata carried by page 0 of a transfer.

Wire Contract (page 0 payload, produced by the exporting device):
    {
        "transfer_id": "6a63c0f1-1c87-4402-84eb-b3141e1e6397",
        "user_id": "f848277c-5398-58f8-a82a-72397af2d450",
        "domain": "https://localhost:8443",
        "total_pages": 7,
        "hash": "<128 hex chars, SHA-512 of the reassembled pages 1..N>",
        "authentication_token": "af32cb1f-c1ae-4753-9982-7cc0d2178355"
    }

The key names are an interface contract with the exporter and are mapped
onto Python field names through aliases. ``total_pages`` counts the
configuration page itself, so data pages are numbered 1..total_pages-1.
"""

import re

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator


# Page numbers are one hex byte, so at most 256 pages (0..255) exist.
MAX_PAGES_COUNT = 256

_SHA512_HEX_RE = re.compile(r"[0-9a-fA-F]{128}")


class TransferConfiguration(BaseModel):
    """
    Transfer metadata parsed from the page 0 frame.

    Attributes:
        transfer_id: Opaque identifier of this transfer session
        user_id: Identifier of the account being transferred
        domain: Server origin associated with the account
        pages_count: Total frames emitted, including the configuration frame
        expected_hash: Lowercase hex SHA-512 of the reassembled payload
        authentication_token: One-time token for the post-transfer handshake
    """

    transfer_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Opaque transfer session identifier",
    )

    user_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Identifier of the transferred account",
    )

    domain: StrictStr = Field(
        ...,
        min_length=1,
        description="Server origin associated with the account",
    )

    pages_count: StrictInt = Field(
        ...,
        alias="total_pages",
        ge=2,
        le=MAX_PAGES_COUNT,
        description="Total number of frames, configuration frame included",
    )

    expected_hash: StrictStr = Field(
        ...,
        alias="hash",
        description="Hex SHA-512 digest of the concatenated data pages",
    )

    authentication_token: StrictStr = Field(
        ...,
        repr=False,
        description="One-time token passed through to the session handshake",
    )

    class Config:
        """Pydantic model configuration."""

        frozen = True

    @field_validator("expected_hash")
    @classmethod
    def _normalize_hash(cls, value: str) -> str:
        if not _SHA512_HEX_RE.fullmatch(value):
            raise ValueError("hash must be 128 hexadecimal characters")
        return value.lower()

    @property
    def data_pages_count(self) -> int:
        """Number of non-configuration pages the exporter emits."""
        return self.pages_count - 1
