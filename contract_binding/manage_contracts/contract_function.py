from abc import ABC, abstractmethod
from typing import Any, Awaitable, Dict, TYPE_CHECKING

from contract_binding.core.types import TransactionOptions, TransactionResult, is_constant
from contract_binding.core.utils import split_tx_options
from contract_binding.module.transport import RawFunction
from contract_binding.transaction.confirmation import ConfirmationPoller

if TYPE_CHECKING:
    from contract_binding.manage_contracts.contract_factory import ContractFactory


class ContractFunction(ABC):
    """Invoker for one ABI function of a bound contract.

    Calling the invoker itself follows the function's ``constant`` flag. The
    ``call``, ``send_transaction`` and ``estimate_gas`` forms are available on
    every function and ignore that flag. Trailing mapping arguments are taken
    as transaction options, see ``split_tx_options``.
    """
    constant: bool = True

    def __init__(self, raw_function: RawFunction, factory: "ContractFactory", abi_entry: Dict[str, Any]):
        self.raw_function = raw_function
        self.factory = factory
        self.abi = abi_entry
        self.name = abi_entry.get("name")

    def _split(self, args):
        return split_tx_options(args, self.factory.class_defaults, self.factory.number_type)

    @abstractmethod
    def __call__(self, *args: Any) -> Awaitable[Any]:
        raise NotImplementedError

    def call(self, *args: Any) -> Awaitable[Any]:
        args, tx_options = self._split(args)
        return self.raw_function.call(args, tx_options)

    def send_transaction(self, *args: Any) -> Awaitable[Any]:
        args, tx_options = self._split(args)
        return self.raw_function.send_transaction(args, tx_options)

    def estimate_gas(self, *args: Any) -> Awaitable[int]:
        args, tx_options = self._split(args)
        return self.raw_function.estimate_gas(args, tx_options)

    def build_transaction(self, *args: Any) -> Awaitable[Dict[str, Any]]:
        args, tx_options = self._split(args)
        return self.raw_function.build_transaction(args, tx_options)

    sendTransaction = send_transaction
    estimateGas = estimate_gas
    request = build_transaction

    def __repr__(self):
        kind = "query" if self.constant else "transaction"
        return f"<{type(self).__name__} {self.name} ({kind})>"


class QueryFunction(ContractFunction):
    constant = True

    def __call__(self, *args: Any) -> Awaitable[Any]:
        return self.call(*args)


class TransactionFunction(ContractFunction):
    constant = False

    def __call__(self, *args: Any) -> Awaitable[TransactionResult]:
        args, tx_options = self._split(args)
        return self._synchronize(args, tx_options)

    async def _synchronize(self, args, tx_options: TransactionOptions) -> TransactionResult:
        tx_hash = await self.raw_function.send_transaction(args, tx_options)
        poller = ConfirmationPoller(self.factory.transport,
                                    tx_hash,
                                    timeout=self.factory.synchronization_timeout,
                                    poll_interval=self.factory.poll_interval)
        receipt = await poller.wait()
        return TransactionResult(tx_hash, receipt)


def make_function(raw_function: RawFunction, factory: "ContractFactory", abi_entry: Dict[str, Any]) -> ContractFunction:
    if is_constant(abi_entry):
        return QueryFunction(raw_function, factory, abi_entry)
    return TransactionFunction(raw_function, factory, abi_entry)
