from contract_binding.core.errors import (
    ContractBindingError,
    ContractNotDeployedError,
    InvalidAddressError,
    MissingBytecodeError,
    NetworkNotFoundError,
    ProviderNotSetError,
    UnresolvedLibrariesError,
)
from contract_binding.core.types import DeploymentRecord, PollState, TransactionResult
from contract_binding.manage_contracts.bound_contract import BoundContract
from contract_binding.manage_contracts.contract_factory import ContractFactory
from contract_binding.module.module_builder import TransportBuilder
from contract_binding.module.transport import RawContract, RawFunction, Transport
from contract_binding.transaction.confirmation import ConfirmationPoller

__all__ = [
    "BoundContract",
    "ConfirmationPoller",
    "ContractBindingError",
    "ContractFactory",
    "ContractNotDeployedError",
    "DeploymentRecord",
    "InvalidAddressError",
    "MissingBytecodeError",
    "NetworkNotFoundError",
    "PollState",
    "ProviderNotSetError",
    "RawContract",
    "RawFunction",
    "TransactionResult",
    "Transport",
    "TransportBuilder",
    "UnresolvedLibrariesError",
]
