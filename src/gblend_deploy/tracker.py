"""Confirmation tracking for gblend-deploy library."""

import logging
import threading
import time
from typing import Callable, Optional

from .constants import DEFAULT_CONFIRMATION_TIMEOUT, DEFAULT_POLL_INTERVAL
from .exceptions import ConfigurationError, ConfirmationTimeoutError, DeploymentCancelledError
from .rpc import NetworkClient
from .types import ConfirmationResult, DeploymentReceipt, PendingDeployment, TrackingState

logger = logging.getLogger(__name__)


class ConfirmationTracker:
    """
    Follows a submitted deployment until it is mined and confirmed.

    Tracking runs in two phases under one overall deadline:

    1. Poll eth_getTransactionReceipt every poll_interval until a receipt
       with a block number shows up (SUBMITTED -> INCLUDED).
    2. For a successful receipt and confirmations > 0, poll eth_blockNumber
       until height - receipt block >= confirmations (INCLUDED -> FINALIZED).

    A reverted receipt ends tracking at once with REVERTED. Running out of
    time raises ConfirmationTimeoutError (TIMED_OUT).
    """

    def __init__(
        self,
        client: NetworkClient,
        timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the tracker.

        Args:
            client: Client bound to the endpoint the transaction was sent to
            timeout: Overall deadline in seconds, counted from track()
            poll_interval: Delay between polls in seconds
            clock: Monotonic time source
            sleep: Function used to wait between polls

        Raises:
            ConfigurationError: If timeout or poll_interval is not positive
        """
        if timeout <= 0:
            raise ConfigurationError(f"Confirmation timeout must be positive, got {timeout}")
        if poll_interval <= 0:
            raise ConfigurationError(f"Poll interval must be positive, got {poll_interval}")

        self.client = client
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep
        self.state = TrackingState.SUBMITTED

    def track(
        self,
        pending: PendingDeployment,
        confirmations: int = 0,
        cancel: Optional[threading.Event] = None,
    ) -> ConfirmationResult:
        """
        Wait for pending to reach a terminal state.

        Args:
            pending: Submitted deployment
            confirmations: Blocks required on top of the inclusion block
            cancel: Optional event; when set, tracking stops at the next poll

        Returns:
            ConfirmationResult in state SUCCESS or REVERTED

        Raises:
            ConfirmationTimeoutError: If the deadline passes first
            DeploymentCancelledError: If cancel is set
            NetworkError: If a poll fails (not retried)
        """
        if confirmations < 0:
            raise ConfigurationError(f"Confirmations must be non-negative, got {confirmations}")

        self.state = TrackingState.SUBMITTED
        deadline = self._clock() + self.timeout

        logger.info("Waiting for transaction %s to be mined...", pending.tx_hash)
        receipt = self._wait_for_receipt(pending, deadline, cancel)
        self.state = TrackingState.INCLUDED
        logger.info("Transaction included in block %d", receipt.block_number)

        if not receipt.succeeded:
            self.state = TrackingState.REVERTED
            gas_limit_reached = receipt.gas_used is not None and receipt.gas_used >= pending.gas_limit
            logger.warning(
                "Transaction %s reverted (gas used %s of %d)",
                pending.tx_hash,
                receipt.gas_used,
                pending.gas_limit,
            )
            if gas_limit_reached:
                logger.warning("Gas limit reached, likely cause of the revert")
            return ConfirmationResult(
                state=TrackingState.REVERTED,
                receipt=receipt,
                gas_limit=pending.gas_limit,
                gas_limit_reached=gas_limit_reached,
            )

        depth = 0
        if confirmations > 0:
            logger.info("Waiting for %d confirmations...", confirmations)
            depth = self._wait_for_depth(pending, receipt, confirmations, deadline, cancel)
            self.state = TrackingState.FINALIZED

        self.state = TrackingState.SUCCESS
        return ConfirmationResult(
            state=TrackingState.SUCCESS,
            receipt=receipt,
            gas_limit=pending.gas_limit,
            confirmations=depth,
        )

    def _wait_for_receipt(
        self,
        pending: PendingDeployment,
        deadline: float,
        cancel: Optional[threading.Event],
    ) -> DeploymentReceipt:
        while True:
            self._check_cancelled(pending, cancel)
            receipt = self.client.get_transaction_receipt(pending.tx_hash)
            # A receipt without a block number is still pending
            if receipt is not None and receipt.block_number is not None:
                return receipt
            logger.debug("No receipt yet for %s", pending.tx_hash)
            self._pause(pending, deadline, None)

    def _wait_for_depth(
        self,
        pending: PendingDeployment,
        receipt: DeploymentReceipt,
        confirmations: int,
        deadline: float,
        cancel: Optional[threading.Event],
    ) -> int:
        highest = receipt.block_number
        while True:
            self._check_cancelled(pending, cancel)
            # Chain height only moves forward for the life of one loop
            highest = max(highest, self.client.block_number())
            depth = max(0, highest - receipt.block_number)
            logger.debug("Confirmations for %s: %d/%d", pending.tx_hash, depth, confirmations)
            if depth >= confirmations:
                return depth
            self._pause(pending, deadline, receipt)

    def _pause(
        self,
        pending: PendingDeployment,
        deadline: float,
        receipt: Optional[DeploymentReceipt],
    ) -> None:
        remaining = deadline - self._clock()
        if remaining <= 0:
            self.state = TrackingState.TIMED_OUT
            raise ConfirmationTimeoutError(pending.tx_hash, self.timeout, receipt)
        self._sleep(min(self.poll_interval, remaining))

    def _check_cancelled(
        self, pending: PendingDeployment, cancel: Optional[threading.Event]
    ) -> None:
        if cancel is not None and cancel.is_set():
            raise DeploymentCancelledError(
                f"Confirmation tracking of {pending.tx_hash} was cancelled"
            )
