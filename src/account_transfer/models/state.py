"""
Transfer State Models
=====================

This module defines the state representation of one transfer attempt.

Core Concepts:
    - TransferPhase: Discrete phases (AWAITING_CONFIGURATION, COLLECTING,
      COMPLETE, FAILED)
    - TransferState: Tagged union of immutable variants, one per phase

Each variant carries only the data that exists in its phase, so an account
without a configuration or frames after a failure cannot be represented.

Transitions:
    AWAITING_CONFIGURATION -> COLLECTING: page 0 parsed
    COLLECTING -> COMPLETE:               all pages collected and verified
    AWAITING_CONFIGURATION -> FAILED:     invalid configuration, cancel
    COLLECTING -> FAILED:                 integrity or payload error, cancel

COMPLETE and FAILED are terminal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from account_transfer.models.account import AccountRecord
from account_transfer.models.configuration import TransferConfiguration

if TYPE_CHECKING:
    from account_transfer.scanning.frame import Frame
    from account_transfer.errors import TransferError


class TransferPhase(str, Enum):
    """
    Discrete phases of a transfer attempt.

    Attributes:
        AWAITING_CONFIGURATION: Waiting for page 0
        COLLECTING: Configuration known, collecting data pages
        COMPLETE: Account reconstructed and verified
        FAILED: Unrecoverable error, state must be discarded
    """

    AWAITING_CONFIGURATION = "AWAITING_CONFIGURATION"
    COLLECTING = "COLLECTING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (TransferPhase.COMPLETE, TransferPhase.FAILED)


@dataclass(frozen=True, slots=True)
class AwaitingConfiguration:
    """Initial state, nothing scanned yet."""

    phase: TransferPhase = field(default=TransferPhase.AWAITING_CONFIGURATION, init=False)


@dataclass(frozen=True, slots=True)
class Collecting:
    """
    Configuration parsed, data pages being collected.

    Attributes:
        configuration: Page 0 metadata
        frames: Collected data frames, pages 1..k in order
    """

    configuration: TransferConfiguration
    frames: Tuple["Frame", ...] = ()
    phase: TransferPhase = field(default=TransferPhase.COLLECTING, init=False)

    @property
    def last_collected_page(self) -> int:
        """Last collected page, 0 (the configuration) when none."""
        return self.frames[-1].page if self.frames else 0

    @property
    def all_collected(self) -> bool:
        return len(self.frames) == self.configuration.data_pages_count

    def __repr__(self) -> str:
        return (
            f"Collecting(transfer_id={self.configuration.transfer_id!r}, "
            f"collected={len(self.frames)}/{self.configuration.data_pages_count})"
        )


@dataclass(frozen=True, slots=True)
class Complete:
    """Account reconstructed; the transfer produced its only result."""

    configuration: TransferConfiguration
    account: AccountRecord
    phase: TransferPhase = field(default=TransferPhase.COMPLETE, init=False)


@dataclass(frozen=True, slots=True)
class Failed:
    """
    Absorbing failure state.

    Keeps the configuration (if any) for diagnostics and the error that
    caused the failure. Collected frames are dropped.
    """

    error: "TransferError"
    configuration: Optional[TransferConfiguration] = None
    phase: TransferPhase = field(default=TransferPhase.FAILED, init=False)


TransferState = Union[AwaitingConfiguration, Collecting, Complete, Failed]
