"""
Frame Exporter
==============

Produces the frame sequence an exporting device displays, compatible with
the decoder and accumulator of this package.

Layout:
    page 0    configuration JSON, total_pages = data pages + 1
    page 1..N account JSON split into chunk_size byte pieces

The account JSON is ASCII-only (non-ASCII is escaped), so a chunk
boundary never falls inside a multi-byte character and the bytes hashed
here are the bytes the decoder re-encodes from the scanned text.
"""

import json
import logging
from typing import List, Optional

from account_transfer.config import settings
from account_transfer.models.account import AccountRecord
from account_transfer.models.configuration import MAX_PAGES_COUNT, TransferConfiguration
from account_transfer.scanning.decoder import encode_frame
from account_transfer.transfer.reconstructor import payload_digest


logger = logging.getLogger(__name__)


def encode_account_payload(account: AccountRecord) -> bytes:
    """Serialize the account into the compact wire JSON."""
    return json.dumps(
        account.model_dump(),
        separators=(",", ":"),
        ensure_ascii=True,
    ).encode("ascii")


def build_transfer_frames(
    account: AccountRecord,
    transfer_id: str,
    authentication_token: str,
    domain: str,
    chunk_size: Optional[int] = None,
    version: Optional[str] = None,
) -> List[str]:
    """
    Build every frame text of a transfer, page 0 first.

    Args:
        account: Account to transfer
        transfer_id: Server-issued transfer identifier
        authentication_token: Server-issued one-time token
        domain: Server origin of the account
        chunk_size: Payload bytes per data frame. Defaults to
            settings.export.chunk_size.
        version: Frame version tag. Defaults to settings.export.version.

    Returns:
        List of frame texts, index == page number

    Raises:
        ValueError: If the payload needs more pages than one hex byte allows
    """
    chunk_size = chunk_size or settings.export.chunk_size
    version = version or settings.export.version
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    payload = encode_account_payload(account)
    chunks = [payload[i:i + chunk_size] for i in range(0, len(payload), chunk_size)]

    pages_count = len(chunks) + 1
    if pages_count > MAX_PAGES_COUNT:
        raise ValueError(
            f"Account payload needs {pages_count} pages, at most {MAX_PAGES_COUNT} are addressable"
        )

    configuration = TransferConfiguration.model_validate({
        "transfer_id": transfer_id,
        "user_id": account.user_id,
        "domain": domain,
        "total_pages": pages_count,
        "hash": payload_digest(payload),
        "authentication_token": authentication_token,
    })

    frames = [encode_frame(version, 0, configuration.model_dump_json(by_alias=True).encode("utf-8"))]
    for page, chunk in enumerate(chunks, start=1):
        frames.append(encode_frame(version, page, chunk))

    logger.info(
        f"Prepared transfer {transfer_id}: {pages_count} frame(s), "
        f"{len(payload)} payload bytes"
    )
    return frames
