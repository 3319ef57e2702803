"""
Data Models
===========

Models for the account transfer core.

This module re-exports all data models for convenient access.

Models:
    Wire:
        - TransferConfiguration: Page 0 metadata
        - AccountRecord: Reassembled account payload

    State:
        - TransferPhase: Enum of transfer phases
        - AwaitingConfiguration, Collecting, Complete, Failed: State variants
        - TransferState: Union of the variants

    Errors:
        - ErrorCode: Machine-readable failure codes
"""

from account_transfer.models.account import AccountRecord
from account_transfer.models.configuration import TransferConfiguration
from account_transfer.models.error_codes import ErrorCode
from account_transfer.models.state import (
    AwaitingConfiguration,
    Collecting,
    Complete,
    Failed,
    TransferPhase,
    TransferState,
)

__all__ = [
    # Wire
    "TransferConfiguration",
    "AccountRecord",
    # State
    "TransferPhase",
    "AwaitingConfiguration",
    "Collecting",
    "Complete",
    "Failed",
    "TransferState",
    # Errors
    "ErrorCode",
]
