"""
Account Transfer Session
========================

Host-facing entry point: feed raw scanned strings, get progress and,
eventually, the verified account.

This wraps one TransferAccumulator with:
    - frame decoding
    - automatic finalize when the last page arrives
    - a lock so a capture thread and a UI thread can share the session
    - cancellation

Error Propagation:
    FrameError, OutOfOrderFrameError,
    InvalidDomainError                 -> raised, session still usable
    other ConfigurationErrors, integrity
    and account payload errors         -> raised, session FAILED
"""

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

from account_transfer.errors import TransferCancelledError
from account_transfer.models.account import AccountRecord
from account_transfer.models.configuration import TransferConfiguration
from account_transfer.models.state import TransferPhase
from account_transfer.scanning.decoder import decode_frame
from account_transfer.transfer.accumulator import IngestOutcome, TransferAccumulator


logger = logging.getLogger(__name__)


@dataclass
class SessionUpdate:
    """Snapshot returned after each processed payload."""

    outcome: IngestOutcome
    phase: TransferPhase
    expected_next_page: Optional[int]
    progress: float
    account: Optional[AccountRecord] = None

    @property
    def accepted(self) -> bool:
        return self.outcome != IngestOutcome.DUPLICATE_PAGE


class AccountTransferSession:
    """
    One account transfer attempt driven by scanned QR strings.

    Example:
        session = AccountTransferSession()

        def on_scan(text: str) -> None:
            try:
                update = session.process_payload(text)
            except TransferError as e:
                if e.recoverable:
                    return  # keep scanning
                show_failure(e)
                return
            if update.account is not None:
                import_account(update.account)
    """

    def __init__(
        self,
        supported_versions: Optional[Iterable[str]] = None,
        require_https_domain: Optional[bool] = None,
    ) -> None:
        self._supported_versions = (
            tuple(supported_versions) if supported_versions is not None else None
        )
        self._accumulator = TransferAccumulator(require_https_domain=require_https_domain)
        self._lock = threading.Lock()
        logger.info("Beginning new account transfer")

    @property
    def phase(self) -> TransferPhase:
        return self._accumulator.phase

    @property
    def configuration(self) -> Optional[TransferConfiguration]:
        return self._accumulator.configuration

    @property
    def account(self) -> Optional[AccountRecord]:
        return self._accumulator.account

    @property
    def progress(self) -> float:
        return self._accumulator.progress()

    @property
    def expected_next_page(self) -> Optional[int]:
        return self._accumulator.expected_next_page()

    def process_payload(self, raw_text: str) -> SessionUpdate:
        """
        Decode and ingest one scanned string.

        Finalizes the transfer as soon as the last page is accepted.

        Args:
            raw_text: Text read from one QR code

        Returns:
            SessionUpdate after the payload was processed

        Raises:
            TransferError: See module docstring for which leave the
                session usable
        """
        with self._lock:
            frame = decode_frame(raw_text, self._supported_versions)
            result = self._accumulator.ingest(frame)

            account = None
            if result.accepted and self._accumulator.ready_to_finalize:
                account = self._accumulator.finalize()

            return SessionUpdate(
                outcome=result.outcome,
                phase=self._accumulator.phase,
                expected_next_page=self._accumulator.expected_next_page(),
                progress=self._accumulator.progress(),
                account=account,
            )

    def cancel(self) -> None:
        """Abandon the transfer. No-op once it is complete or failed."""
        with self._lock:
            if self._accumulator.phase.is_terminal:
                return
            self._accumulator.fail(TransferCancelledError())
            logger.info("Account transfer cancelled")
