import types
from typing import Any, Dict, Optional, TYPE_CHECKING

from eth_typing import HexStr

from contract_binding.core.types import Abi, AbiEntryType, entry_type
from contract_binding.manage_contracts.contract_function import ContractFunction, make_function
from contract_binding.module.transport import RawContract

if TYPE_CHECKING:
    from contract_binding.manage_contracts.contract_factory import ContractFactory


class BoundContract:
    """Live handle on one deployed contract.

    Functions and events of the ABI are reachable through the ``functions``
    and ``events`` tables or as attributes::

        registry = factory.at(address)
        addr = await registry.getContractAddr(name)
        tx_hash, receipt = await registry.initiateContract(name, {"from": owner})
    """

    def __init__(self, factory: "ContractFactory", contract: RawContract, abi: Optional[Abi] = None):
        self.factory = factory
        self.contract: RawContract = contract
        self.abi: Abi = abi if abi is not None else (contract.abi or [])
        self.functions: Dict[str, ContractFunction] = {}
        self.events: Dict[str, Any] = {}
        self.all_events = None
        self.address: Optional[HexStr] = None
        self.transaction_hash: Optional[HexStr] = None
        self.bind()

    def bind(self):
        functions = {}
        events = {}
        for entry in self.abi:
            kind = entry_type(entry)
            if kind == AbiEntryType.FUNCTION:
                name = entry["name"]
                functions[name] = make_function(self.contract.function(name), self.factory, entry)
            elif kind == AbiEntryType.EVENT:
                name = entry["name"]
                events[name] = self.contract.event(name)

        self.functions = functions
        self.events = events
        self.all_events = self.contract.all_events
        self.address = self.contract.address
        self.transaction_hash = self.contract.transaction_hash
        return self

    @property
    def contract_name(self) -> str:
        return self.factory.contract_name

    def __getattr__(self, name: str) -> Any:
        # only reached for names that are not regular attributes
        if name.startswith("__") or name in ("functions", "events", "factory"):
            raise AttributeError(name)
        if name in self.functions:
            return self.functions[name]
        if name in self.events:
            return self.events[name]
        extensions = self.factory.extensions
        if name in extensions:
            value = extensions[name]
            if isinstance(value, types.FunctionType):
                return types.MethodType(value, self)
            return value
        raise AttributeError(f"{self.contract_name} has no function, event or extension named '{name}'")

    def __repr__(self):
        return f"<{type(self).__name__} {self.contract_name} at {self.address}>"
