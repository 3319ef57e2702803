"""
Error Codes
===========

Fixed set of machine-readable codes for transfer failures.

Every TransferError carries exactly ONE code so that a host screen can
choose a message ("rescan", "restart the transfer", "security warning")
without matching on exception text.

Rules:
    - One clear cause per code
    - Codes are stable strings, safe to log and to show in diagnostics
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Machine-readable transfer error codes.

    Attributes:
        UNSUPPORTED_VERSION: Frame version tag outside the allow-list
        MALFORMED_PAGE: Page field missing or not two hex characters
        ENCODING_ERROR: Frame payload could not be encoded as UTF-8
        OUT_OF_ORDER: Frame page is not the expected next page
        MALFORMED_CONFIGURATION: Page 0 payload is not a JSON object
        MISSING_FIELD: Page 0 payload lacks a field or has a wrong type
        INVALID_CONFIGURATION: Page 0 field values are out of range
        INVALID_DOMAIN: Configuration domain is not an accepted origin
        PAGE_COUNT_MISMATCH: Collected pages disagree with declared count
        INTEGRITY_MISMATCH: SHA-512 of reassembled payload differs
        INVALID_ACCOUNT_PAYLOAD: Hash matched but account JSON is invalid
        ALREADY_FAILED: Transfer is in the absorbing failed state
        ALREADY_COMPLETE: Transfer already produced its account
        INCOMPLETE: Finalize requested before all pages were collected
        CANCELLED: Transfer was cancelled by the host
    """

    # Frame-level
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    MALFORMED_PAGE = "MALFORMED_PAGE"
    ENCODING_ERROR = "ENCODING_ERROR"

    # Sequencing
    OUT_OF_ORDER = "OUT_OF_ORDER"

    # Configuration-level
    MALFORMED_CONFIGURATION = "MALFORMED_CONFIGURATION"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    INVALID_DOMAIN = "INVALID_DOMAIN"

    # Reassembly
    PAGE_COUNT_MISMATCH = "PAGE_COUNT_MISMATCH"
    INTEGRITY_MISMATCH = "INTEGRITY_MISMATCH"
    INVALID_ACCOUNT_PAYLOAD = "INVALID_ACCOUNT_PAYLOAD"

    # Lifecycle
    ALREADY_FAILED = "ALREADY_FAILED"
    ALREADY_COMPLETE = "ALREADY_COMPLETE"
    INCOMPLETE = "INCOMPLETE"
    CANCELLED = "CANCELLED"
