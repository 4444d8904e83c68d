import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from web3 import Web3
from web3.exceptions import TimeExhausted

from contract_binding.core.types import (
    DEFAULT_SYNCHRONIZATION_TIMEOUT,
    POLL_INTERVAL,
    PollState,
    TransactionHash,
)
from contract_binding.module.transport import Transport


class ConfirmationPoller:
    """Waits for the receipt of one submitted transaction.

    Lookups are strictly sequential with a fixed ``poll_interval`` pause
    between them. A ``timeout`` of zero or less polls until a receipt shows up
    or the transport fails.
    """
    logger = logging.getLogger("ConfirmationPoller")

    def __init__(self,
                 transport: Transport,
                 transaction_hash: TransactionHash,
                 timeout: float = DEFAULT_SYNCHRONIZATION_TIMEOUT,
                 poll_interval: float = POLL_INTERVAL,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
        self.transport = transport
        self.transaction_hash = transaction_hash
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep
        self.state = PollState.SUBMITTED
        self.attempts = 0
        self.started_at: Optional[float] = None
        self.receipt = None

    def _tx_repr(self) -> str:
        if isinstance(self.transaction_hash, str):
            return self.transaction_hash
        return Web3.to_hex(self.transaction_hash)

    def _timed_out(self) -> bool:
        return self.timeout > 0 and self._clock() - self.started_at > self.timeout

    async def wait(self) -> Any:
        if self.state is not PollState.SUBMITTED:
            raise RuntimeError(f"Transaction {self._tx_repr()} is already {self.state.value}")
        self.started_at = self._clock()
        self.state = PollState.PENDING

        while True:
            self.attempts += 1
            try:
                receipt = await self.transport.get_transaction_receipt(self.transaction_hash)
            except Exception:
                self.state = PollState.ERRORED
                self.logger.debug(f"receipt lookup for {self._tx_repr()} failed on attempt {self.attempts}")
                raise

            if receipt is not None:
                self.state = PollState.CONFIRMED
                self.receipt = receipt
                self.logger.debug(f"transaction {self._tx_repr()} confirmed after {self.attempts} attempt(s)")
                return receipt

            if self._timed_out():
                self.state = PollState.TIMED_OUT
                raise TimeExhausted(
                    f"Transaction {self._tx_repr()} wasn't processed in {self.timeout} seconds!"
                )

            await self._sleep(self.poll_interval)

    def start(self) -> "asyncio.Task":
        return asyncio.ensure_future(self.wait())

