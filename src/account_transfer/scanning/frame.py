"""
Frame Data Model
=================

Internal frame representation for the scanning pipeline.

This module defines the typed Frame class that is used as the interface
between the frame decoder and the transfer accumulator.

Design Rules:
    - This is the ONLY frame format passed to downstream stages
    - Constructed by decode_frame, which is the only validation point
    - Never prints its payload, which may contain private key material
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Frame:
    """
    One decoded QR scan.

    It is immutable (frozen) to prevent accidental modification.

    Attributes:
        version: One-character protocol version tag
        page: Zero-based page number (0 is the configuration page)
        payload: Remainder of the scanned text, UTF-8 encoded
    """

    version: str
    page: int
    payload: bytes

    @property
    def is_configuration(self) -> bool:
        return self.page == 0

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the payload."""
        return (
            f"Frame(version={self.version!r}, "
            f"page={self.page}, "
            f"payload_len={len(self.payload)})"
        )
