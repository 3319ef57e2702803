"""
Transfer Errors
===============

Exception hierarchy for the account transfer pipeline.

Every error carries an ErrorCode and a ``recoverable`` flag:
    - recoverable errors (frame-level, sequencing) leave the transfer
      state untouched; the operator rescans and the transfer continues
    - fatal errors (configuration, integrity, account payload) move the
      transfer into the absorbing FAILED state

Messages never contain payload bytes, key material or tokens.
"""

from typing import Optional

from account_transfer.models.error_codes import ErrorCode


class TransferError(Exception):
    """Base class for all account transfer errors."""

    code: ErrorCode = ErrorCode.ALREADY_FAILED
    recoverable: bool = False
    security_relevant: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.value}: {self.message})"


# =============================================================================
# Frame-level errors
# =============================================================================

class FrameError(TransferError):
    """Raised when a scanned string cannot be decoded into a frame."""

    recoverable = True


class UnsupportedVersionError(FrameError):
    code = ErrorCode.UNSUPPORTED_VERSION

    def __init__(self, version: str) -> None:
        super().__init__(f"Unsupported frame version: {version!r}")
        self.version = version


class MalformedPageError(FrameError):
    code = ErrorCode.MALFORMED_PAGE


class FrameEncodingError(FrameError):
    code = ErrorCode.ENCODING_ERROR


# =============================================================================
# Sequencing errors
# =============================================================================

class OutOfOrderFrameError(TransferError):
    """Raised when a frame does not carry the expected next page."""

    code = ErrorCode.OUT_OF_ORDER
    recoverable = True

    def __init__(self, page: int, expected_page: Optional[int]) -> None:
        super().__init__(
            f"Unexpected page {page}, expected "
            f"{expected_page if expected_page is not None else 'no further pages'}"
        )
        self.page = page
        self.expected_page = expected_page


# =============================================================================
# Configuration-level errors
# =============================================================================

class ConfigurationError(TransferError):
    """Raised when the page 0 configuration cannot be used."""


class MalformedConfigurationError(ConfigurationError):
    code = ErrorCode.MALFORMED_CONFIGURATION


class MissingConfigurationFieldError(ConfigurationError):
    code = ErrorCode.MISSING_FIELD

    def __init__(self, fields: list) -> None:
        super().__init__(f"Missing or invalid configuration fields: {', '.join(fields)}")
        self.fields = fields


class InvalidConfigurationError(ConfigurationError):
    code = ErrorCode.INVALID_CONFIGURATION


class InvalidDomainError(ConfigurationError):
    """Raised when page 0 names a non-https origin. Page 0 may be rescanned."""

    code = ErrorCode.INVALID_DOMAIN
    recoverable = True


# =============================================================================
# Reassembly errors
# =============================================================================

class PageCountMismatchError(TransferError):
    code = ErrorCode.PAGE_COUNT_MISMATCH


class IntegrityMismatchError(TransferError):
    """Raised when the reassembled payload does not match the declared hash."""

    code = ErrorCode.INTEGRITY_MISMATCH
    security_relevant = True


class InvalidAccountPayloadError(TransferError):
    code = ErrorCode.INVALID_ACCOUNT_PAYLOAD


# =============================================================================
# Lifecycle errors
# =============================================================================

class TransferAlreadyFailedError(TransferError):
    """Raised on any operation after the transfer entered FAILED."""

    code = ErrorCode.ALREADY_FAILED

    def __init__(self, cause: TransferError) -> None:
        super().__init__(f"Transfer already failed ({cause.code.value})")
        self.cause = cause


class TransferCompletedError(TransferError):
    code = ErrorCode.ALREADY_COMPLETE

    def __init__(self) -> None:
        super().__init__("Transfer already completed")


class IncompleteTransferError(TransferError):
    code = ErrorCode.INCOMPLETE
    recoverable = True


class TransferCancelledError(TransferError):
    code = ErrorCode.CANCELLED

    def __init__(self) -> None:
        super().__init__("Transfer cancelled")
