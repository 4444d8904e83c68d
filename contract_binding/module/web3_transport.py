import logging
from typing import Any, AsyncIterator, Dict, Optional, Sequence

from eth_typing import HexStr
from web3 import AsyncWeb3, Web3
from web3.contract.async_contract import AsyncContract
from web3.exceptions import TransactionNotFound

from contract_binding.core.types import (
    DEFAULT_SYNCHRONIZATION_TIMEOUT,
    POLL_INTERVAL,
    Abi,
    TransactionHash,
    TransactionOptions,
)
from contract_binding.module.transport import RawContract, RawFunction, Transport
from contract_binding.transaction.confirmation import ConfirmationPoller


class Web3RawFunction(RawFunction):

    def __init__(self, contract: AsyncContract, name: str):
        self.contract = contract
        self.name = name

    def _bound(self, args: Sequence[Any]):
        return getattr(self.contract.functions, self.name)(*args)

    async def call(self, args: Sequence[Any], tx_options: TransactionOptions) -> Any:
        return await self._bound(args).call(dict(tx_options))

    async def send_transaction(self, args: Sequence[Any], tx_options: TransactionOptions) -> HexStr:
        tx_hash = await self._bound(args).transact(dict(tx_options))
        return HexStr(Web3.to_hex(tx_hash))

    async def estimate_gas(self, args: Sequence[Any], tx_options: TransactionOptions) -> int:
        return await self._bound(args).estimate_gas(dict(tx_options))

    async def build_transaction(self, args: Sequence[Any], tx_options: TransactionOptions) -> Dict[str, Any]:
        return await self._bound(args).build_transaction(dict(tx_options))


class Web3RawContract(RawContract):

    def __init__(self,
                 web3: AsyncWeb3,
                 abi: Abi,
                 address: Optional[HexStr] = None,
                 transaction_hash: Optional[HexStr] = None):
        if address is not None:
            address = Web3.to_checksum_address(address)
        super(Web3RawContract, self).__init__(abi, address, transaction_hash)
        self.web3 = web3
        if address is None:
            self.instance_contract = None
        else:
            self.instance_contract = self.web3.eth.contract(address=address, abi=abi)

    def _require_address(self) -> AsyncContract:
        if self.instance_contract is None:
            raise RuntimeError("Contract is not mined yet, it has no address")
        return self.instance_contract

    def function(self, name: str) -> RawFunction:
        return Web3RawFunction(self._require_address(), name)

    def event(self, name: str) -> Any:
        return getattr(self._require_address().events, name)

    @property
    def all_events(self) -> Any:
        return self._require_address().events


class Web3Transport(Transport):
    """Transport backed by ``web3.AsyncWeb3``."""
    logger = logging.getLogger("Web3Transport")

    def __init__(self, web3: AsyncWeb3):
        self.web3 = web3

    async def get_transaction_receipt(self, transaction_hash: TransactionHash) -> Optional[Any]:
        try:
            return await self.web3.eth.get_transaction_receipt(transaction_hash)
        except TransactionNotFound:
            return None

    async def network_id(self) -> str:
        version = await self.web3.net.version
        return str(version)

    def contract_at(self, abi: Abi, address: HexStr) -> RawContract:
        return Web3RawContract(self.web3, abi, address=address)

    async def deploy(self,
                     abi: Abi,
                     args: Sequence[Any],
                     tx_options: TransactionOptions,
                     timeout: float = DEFAULT_SYNCHRONIZATION_TIMEOUT,
                     poll_interval: float = POLL_INTERVAL) -> AsyncIterator[RawContract]:
        tx = dict(tx_options)
        bytecode = tx.pop("data")
        contract_cls = self.web3.eth.contract(abi=abi, bytecode=bytecode)
        tx_hash = HexStr(Web3.to_hex(await contract_cls.constructor(*args).transact(tx)))
        self.logger.debug(f"contract creation submitted: {tx_hash}")
        yield Web3RawContract(self.web3, abi, transaction_hash=tx_hash)

        poller = ConfirmationPoller(self, tx_hash, timeout=timeout, poll_interval=poll_interval)
        receipt = await poller.wait()
        yield Web3RawContract(self.web3, abi, address=receipt["contractAddress"], transaction_hash=tx_hash)
