"""
Account Transfer
================

Offline account transfer between devices through a sequence of QR codes.

The exporting device shows frames "<version><hex page><payload>"; page 0
carries the transfer configuration, pages 1..N carry the account JSON.
This package decodes scanned frames, accumulates them strictly in order,
verifies the SHA-512 of the reassembled payload and yields the account.

Components:
    - scanning: Frame model and frame codec
    - transfer: Configuration extractor, accumulator, reconstructor,
      session facade and exporter
    - models: Wire models, state variants and error codes
    - errors: Typed exception hierarchy

Example:
    from account_transfer.transfer import AccountTransferSession

    session = AccountTransferSession()
    for text in scanned_texts:
        update = session.process_payload(text)
    print(session.account.fingerprint)
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
