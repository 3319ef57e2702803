"""
Transfer Module
===============

Configuration extraction, frame accumulation, account reconstruction and
the session facade.

This module provides:
    - parse_configuration: Page 0 payload -> TransferConfiguration
    - TransferAccumulator: State machine collecting frames
    - finalize_account: Reassembly + SHA-512 verification -> AccountRecord
    - AccountTransferSession: Raw scanned strings in, account out
    - build_transfer_frames: Exporter-side frame sequence
"""

from account_transfer.transfer.configuration import parse_configuration
from account_transfer.transfer.reconstructor import finalize_account, payload_digest
from account_transfer.transfer.accumulator import (
    IngestOutcome,
    IngestResult,
    TransferAccumulator,
)
from account_transfer.transfer.session import AccountTransferSession, SessionUpdate
from account_transfer.transfer.exporter import build_transfer_frames, encode_account_payload


__all__ = [
    "parse_configuration",
    "finalize_account",
    "payload_digest",
    "IngestOutcome",
    "IngestResult",
    "TransferAccumulator",
    "AccountTransferSession",
    "SessionUpdate",
    "build_transfer_frames",
    "encode_account_payload",
]
