from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, Optional, Sequence

from eth_typing import HexStr

from contract_binding.core.types import (
    DEFAULT_SYNCHRONIZATION_TIMEOUT,
    POLL_INTERVAL,
    Abi,
    TransactionHash,
    TransactionOptions,
)


class RawFunction(ABC):
    """A contract function as exposed by the RPC client, before any wrapping."""

    @abstractmethod
    async def call(self, args: Sequence[Any], tx_options: TransactionOptions) -> Any:
        raise NotImplementedError

    @abstractmethod
    async def send_transaction(self, args: Sequence[Any], tx_options: TransactionOptions) -> HexStr:
        raise NotImplementedError

    @abstractmethod
    async def estimate_gas(self, args: Sequence[Any], tx_options: TransactionOptions) -> int:
        raise NotImplementedError

    @abstractmethod
    async def build_transaction(self, args: Sequence[Any], tx_options: TransactionOptions) -> Dict[str, Any]:
        raise NotImplementedError


class RawContract(ABC):
    """On-chain contract object produced by a transport."""

    def __init__(self,
                 abi: Abi,
                 address: Optional[HexStr] = None,
                 transaction_hash: Optional[HexStr] = None):
        self.abi = abi
        self.address = address
        self.transaction_hash = transaction_hash

    @abstractmethod
    def function(self, name: str) -> RawFunction:
        raise NotImplementedError

    @abstractmethod
    def event(self, name: str) -> Any:
        raise NotImplementedError

    @property
    @abstractmethod
    def all_events(self) -> Any:
        raise NotImplementedError


class Transport(ABC):
    """RPC client capability used by contract factories."""

    @abstractmethod
    async def get_transaction_receipt(self, transaction_hash: TransactionHash) -> Optional[Any]:
        """Returns the receipt, or None while the transaction is not mined."""
        raise NotImplementedError

    @abstractmethod
    async def network_id(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def contract_at(self, abi: Abi, address: HexStr) -> RawContract:
        raise NotImplementedError

    @abstractmethod
    def deploy(self,
               abi: Abi,
               args: Sequence[Any],
               tx_options: TransactionOptions,
               timeout: float = DEFAULT_SYNCHRONIZATION_TIMEOUT,
               poll_interval: float = POLL_INTERVAL) -> AsyncIterator[RawContract]:
        """Submits a contract creation and yields the contract as it becomes known.

        Implementations may yield more than once. Snapshots without an address
        describe a creation that is not mined yet. ``timeout`` and
        ``poll_interval`` bound the wait for the creation receipt, a timeout of
        zero or less waits forever.
        """
        raise NotImplementedError
