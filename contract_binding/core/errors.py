"""Exceptions raised by contract bindings.

Configuration problems are raised synchronously at the call site. Transport
failures are never wrapped: the error reported by web3 propagates as is.
"""

from typing import Iterable


class ContractBindingError(Exception):
    """Base exception for contract binding errors."""

    pass


class ProviderNotSetError(ContractBindingError, RuntimeError):
    """Raised when deploying before a provider was configured."""

    pass


class MissingBytecodeError(ContractBindingError, RuntimeError):
    """Raised when deploying a contract whose artifact has no bytecode."""

    pass


class UnresolvedLibrariesError(ContractBindingError, RuntimeError):
    """Raised when bytecode still contains library placeholders at deploy time."""

    def __init__(self, contract_name: str, libraries: Iterable[str]):
        self.contract_name = contract_name
        self.libraries = sorted(set(libraries))
        super().__init__(
            f"{contract_name} contains unresolved libraries. You must deploy and link"
            f" the following libraries before you can deploy a new version of"
            f" {contract_name}: {', '.join(self.libraries)}"
        )


class InvalidAddressError(ContractBindingError, ValueError):
    """Raised when attaching to something that is not a 42 character address."""

    pass


class ContractNotDeployedError(ContractBindingError, LookupError):
    """Raised when the active network record carries no address."""

    pass


class NetworkNotFoundError(ContractBindingError, LookupError):
    """Raised when the live network has no artifacts."""

    pass
