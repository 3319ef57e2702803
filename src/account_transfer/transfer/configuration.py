"""
Configuration Extractor
=======================

Interprets the payload of page 0 as TransferConfiguration.

Failure classification:
    - not JSON, or JSON that is not an object -> MalformedConfigurationError
    - absent field or wrong JSON type         -> MissingConfigurationFieldError
    - out of range page count, bad hash       -> InvalidConfigurationError
    - non-https domain (when required)        -> InvalidDomainError

The extractor does not know which page it is given; the accumulator only
calls it for page 0.
"""

import json
import logging
from typing import Optional
from urllib.parse import urlsplit

from pydantic import ValidationError

from account_transfer.config import settings
from account_transfer.errors import (
    InvalidConfigurationError,
    InvalidDomainError,
    MalformedConfigurationError,
    MissingConfigurationFieldError,
)
from account_transfer.models.configuration import TransferConfiguration


logger = logging.getLogger(__name__)


# Pydantic error types that mean "field absent or of the wrong JSON type"
_STRUCTURAL_ERROR_TYPES = frozenset({
    "missing",
    "string_type",
    "int_type",
})


def parse_configuration(
    payload: bytes,
    require_https_domain: Optional[bool] = None,
) -> TransferConfiguration:
    """
    Parse the page 0 payload.

    Args:
        payload: Raw UTF-8 JSON bytes of the configuration frame
        require_https_domain: Reject non-https domains. Defaults to
            settings.transfer.require_https_domain.

    Returns:
        Validated TransferConfiguration

    Raises:
        ConfigurationError: One of its subclasses, see module docstring
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise MalformedConfigurationError("Configuration page is not valid JSON")

    if not isinstance(data, dict):
        raise MalformedConfigurationError("Configuration page is not a JSON object")

    try:
        configuration = TransferConfiguration.model_validate(data)
    except ValidationError as e:
        raise _classify_validation_error(e)

    if require_https_domain is None:
        require_https_domain = settings.transfer.require_https_domain
    if require_https_domain:
        _check_domain(configuration.domain)

    logger.info(
        f"Transfer configuration parsed: transfer_id={configuration.transfer_id}, "
        f"pages={configuration.pages_count}"
    )
    return configuration


def _classify_validation_error(error: ValidationError):
    structural = []
    invalid = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "<root>"
        if item["type"] in _STRUCTURAL_ERROR_TYPES:
            structural.append(field)
        else:
            invalid.append(field)

    if structural:
        return MissingConfigurationFieldError(sorted(set(structural)))
    return InvalidConfigurationError(
        f"Invalid configuration values: {', '.join(sorted(set(invalid)))}"
    )


def _check_domain(domain: str) -> None:
    parts = urlsplit(domain)
    if parts.scheme != "https" or not parts.netloc:
        raise InvalidDomainError(f"Transfer domain must be an https origin: {domain!r}")
