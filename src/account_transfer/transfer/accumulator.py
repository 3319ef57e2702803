"""
Transfer Accumulator
====================

Deterministic state machine that collects frames for one transfer attempt.

States:
    AWAITING_CONFIGURATION -> COLLECTING -> COMPLETE
    AWAITING_CONFIGURATION | COLLECTING -> FAILED (absorbing)

Sequencing Rules:
    - Page 0 must come first and is parsed exactly once
    - Then pages 1..N-1 strictly in order, no gaps
    - A page that was already collected is ignored (idempotent rescan)
    - Any other page raises OutOfOrderFrameError without changing state

Recoverable errors never change state. Fatal configuration errors and
reassembly or integrity errors move the accumulator to FAILED, after
which every call raises TransferAlreadyFailedError.

Concurrency:
    Not thread-safe. Callers serialize ingest() for one accumulator.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from account_transfer.errors import (
    ConfigurationError,
    IncompleteTransferError,
    OutOfOrderFrameError,
    TransferAlreadyFailedError,
    TransferCompletedError,
    TransferError,
)
from account_transfer.models.account import AccountRecord
from account_transfer.models.configuration import TransferConfiguration
from account_transfer.models.state import (
    AwaitingConfiguration,
    Collecting,
    Complete,
    Failed,
    TransferPhase,
    TransferState,
)
from account_transfer.scanning.frame import Frame
from account_transfer.transfer.configuration import parse_configuration
from account_transfer.transfer.reconstructor import finalize_account


logger = logging.getLogger(__name__)


class IngestOutcome(str, Enum):
    """
    What ingest() did with a frame.

    Attributes:
        CONFIGURATION_ACCEPTED: Page 0 parsed, collection started
        PAGE_ACCEPTED: Data page appended
        DUPLICATE_PAGE: Page already collected, ignored
    """

    CONFIGURATION_ACCEPTED = "CONFIGURATION_ACCEPTED"
    PAGE_ACCEPTED = "PAGE_ACCEPTED"
    DUPLICATE_PAGE = "DUPLICATE_PAGE"


@dataclass
class IngestResult:
    """Result of ingesting one frame."""

    outcome: IngestOutcome
    page: int
    phase: TransferPhase
    expected_next_page: Optional[int]

    @property
    def accepted(self) -> bool:
        return self.outcome != IngestOutcome.DUPLICATE_PAGE

    def __repr__(self) -> str:
        return (
            f"IngestResult({self.outcome.value}, page={self.page}, "
            f"next={self.expected_next_page})"
        )


class TransferAccumulator:
    """
    Collects frames of one transfer and produces the account once.

    Example:
        accumulator = TransferAccumulator()

        for text in scanned_texts:
            try:
                accumulator.ingest(decode_frame(text))
            except OutOfOrderFrameError:
                continue  # rescan the expected page
            if accumulator.ready_to_finalize:
                account = accumulator.finalize()
    """

    def __init__(self, require_https_domain: Optional[bool] = None) -> None:
        """
        Initialize an empty transfer.

        Args:
            require_https_domain: Passed to the configuration extractor.
                Defaults to settings.transfer.require_https_domain.
        """
        self._require_https_domain = require_https_domain
        self._state: TransferState = AwaitingConfiguration()

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    @property
    def state(self) -> TransferState:
        return self._state

    @property
    def phase(self) -> TransferPhase:
        return self._state.phase

    @property
    def configuration(self) -> Optional[TransferConfiguration]:
        return getattr(self._state, "configuration", None)

    @property
    def account(self) -> Optional[AccountRecord]:
        if isinstance(self._state, Complete):
            return self._state.account
        return None

    @property
    def ready_to_finalize(self) -> bool:
        """True when every declared data page has been collected."""
        return isinstance(self._state, Collecting) and self._state.all_collected

    def expected_next_page(self) -> Optional[int]:
        """
        Page the caller should scan next.

        Returns:
            0 while awaiting configuration, the next data page while
            collecting, None once all pages are collected or the
            transfer is terminal.
        """
        state = self._state
        if isinstance(state, AwaitingConfiguration):
            return 0
        if isinstance(state, Collecting) and not state.all_collected:
            return state.last_collected_page + 1
        return None

    def is_complete(self) -> bool:
        return isinstance(self._state, Complete)

    def progress(self) -> float:
        """
        Scanning progress in [0, 1].

        0 before the configuration, next_page / pages_count while
        collecting, 1 once every page is collected.
        """
        state = self._state
        if isinstance(state, Complete):
            return 1.0
        if isinstance(state, Collecting):
            next_page = self.expected_next_page()
            pages_count = state.configuration.pages_count
            return (next_page if next_page is not None else pages_count) / pages_count
        return 0.0

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def ingest(self, frame: Frame) -> IngestResult:
        """
        Ingest one decoded frame.

        Args:
            frame: Frame produced by decode_frame

        Returns:
            IngestResult describing what happened

        Raises:
            OutOfOrderFrameError: Frame is not the expected next page
                (state unchanged)
            InvalidDomainError: Page 0 names a non-https origin
                (state unchanged)
            ConfigurationError: Page 0 could not be used (state FAILED)
            TransferAlreadyFailedError: Transfer already failed
            TransferCompletedError: Transfer already completed
        """
        self._ensure_active()
        state = self._state

        if isinstance(state, AwaitingConfiguration):
            return self._ingest_configuration(frame)
        return self._ingest_page(state, frame)

    def finalize(self) -> AccountRecord:
        """
        Verify the collected pages and produce the account.

        Returns:
            AccountRecord, also kept in the COMPLETE state

        Raises:
            IncompleteTransferError: Not every page collected yet
                (state unchanged)
            PageCountMismatchError, IntegrityMismatchError,
            InvalidAccountPayloadError: Verification failed (state FAILED)
            TransferAlreadyFailedError, TransferCompletedError: Terminal state
        """
        self._ensure_active()
        state = self._state

        if not isinstance(state, Collecting) or not state.all_collected:
            raise IncompleteTransferError(
                f"Cannot finalize, expected page {self.expected_next_page()} is missing"
            )

        configuration = state.configuration
        try:
            account = finalize_account(state.frames, configuration.expected_hash)
        except TransferError as e:
            self._transition_to_failed(e, configuration)
            raise

        self._state = Complete(configuration=configuration, account=account)
        logger.info(f"Transfer {configuration.transfer_id} complete")
        return account

    def fail(self, error: TransferError) -> None:
        """
        Move an active transfer to FAILED, e.g. on host cancellation.

        Raises:
            TransferAlreadyFailedError, TransferCompletedError: Terminal state
        """
        self._ensure_active()
        self._transition_to_failed(error, self.configuration)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _ingest_configuration(self, frame: Frame) -> IngestResult:
        if frame.page != 0:
            raise OutOfOrderFrameError(frame.page, 0)

        try:
            configuration = parse_configuration(
                frame.payload,
                require_https_domain=self._require_https_domain,
            )
        except ConfigurationError as e:
            if not e.recoverable:
                self._transition_to_failed(e, None)
            raise

        self._state = Collecting(configuration=configuration)
        return self._result(IngestOutcome.CONFIGURATION_ACCEPTED, frame)

    def _ingest_page(self, state: Collecting, frame: Frame) -> IngestResult:
        if frame.page <= state.last_collected_page:
            logger.debug(f"Ignoring already collected page {frame.page}")
            return self._result(IngestOutcome.DUPLICATE_PAGE, frame)

        expected = self.expected_next_page()
        if frame.page != expected:
            logger.debug(f"Rejecting page {frame.page}, expected {expected}")
            raise OutOfOrderFrameError(frame.page, expected)

        self._state = Collecting(
            configuration=state.configuration,
            frames=state.frames + (frame,),
        )
        logger.debug(
            f"Collected page {frame.page}/{state.configuration.data_pages_count}"
        )
        return self._result(IngestOutcome.PAGE_ACCEPTED, frame)

    def _result(self, outcome: IngestOutcome, frame: Frame) -> IngestResult:
        return IngestResult(
            outcome=outcome,
            page=frame.page,
            phase=self.phase,
            expected_next_page=self.expected_next_page(),
        )

    def _ensure_active(self) -> None:
        state = self._state
        if isinstance(state, Failed):
            raise TransferAlreadyFailedError(state.error)
        if isinstance(state, Complete):
            raise TransferCompletedError()

    def _transition_to_failed(
        self,
        error: TransferError,
        configuration: Optional[TransferConfiguration],
    ) -> None:
        logger.warning(
            f"Transfer failed: {self.phase.value} -> FAILED "
            f"(code: {error.code.value})"
        )
        self._state = Failed(error=error, configuration=configuration)
