import logging
from collections.abc import Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any, Awaitable, Dict, List, Optional, Union

from eth_typing import HexStr

from contract_binding.core.errors import (
    ContractNotDeployedError,
    InvalidAddressError,
    MissingBytecodeError,
    ProviderNotSetError,
    UnresolvedLibrariesError,
)
from contract_binding.core.types import (
    DEFAULT_NETWORK,
    DEFAULT_SYNCHRONIZATION_TIMEOUT,
    POLL_INTERVAL,
    Abi,
    DeploymentRecord,
    TransactionOptions,
)
from contract_binding.core.utils import NumberType, is_address_length, split_tx_options
from contract_binding.manage_contracts.artifacts import load_artifact, parse_artifact
from contract_binding.manage_contracts.bound_contract import BoundContract
from contract_binding.manage_contracts.linker import NetworkRegistry
from contract_binding.module.module_builder import TransportBuilder
from contract_binding.module.transport import Transport


class ContractFactory:
    """Creates bound instances of one contract.

    The factory owns everything instances share: the transport, the class
    wide transaction defaults, the network records and the active network.
    None of it is synchronized, so switching the network or the provider
    while calls are in flight gives those calls an unstable view.
    """
    logger = logging.getLogger("ContractFactory")

    @classmethod
    def from_json(cls, compiled_contract: Union[Path, str], provider: Any = None, **kwargs) -> "ContractFactory":
        artifact = load_artifact(compiled_contract)
        kwargs.setdefault("generated_with", artifact.generated_with)
        return cls(artifact.contract_name, artifact.networks, provider=provider, **kwargs)

    @classmethod
    def from_artifact(cls, data: Dict[str, Any], provider: Any = None, **kwargs) -> "ContractFactory":
        artifact = parse_artifact(data)
        kwargs.setdefault("generated_with", artifact.generated_with)
        return cls(artifact.contract_name, artifact.networks, provider=provider, **kwargs)

    def __init__(self,
                 contract_name: str,
                 all_networks: Optional[Dict[str, Union[Dict[str, Any], DeploymentRecord]]] = None,
                 provider: Any = None,
                 defaults: Optional[TransactionOptions] = None,
                 number_type: NumberType = Decimal,
                 synchronization_timeout: float = DEFAULT_SYNCHRONIZATION_TIMEOUT,
                 poll_interval: float = POLL_INTERVAL,
                 generated_with: Optional[str] = None):
        self.contract_name = contract_name
        self.generated_with = generated_with
        records = {}
        for network_id, record in (all_networks or {}).items():
            if not isinstance(record, DeploymentRecord):
                record = DeploymentRecord.from_dict(record)
            records[str(network_id)] = record
        self.registry = NetworkRegistry(records, contract_name)
        # default artifacts stay usable until the live network is detected
        self.registry.set_network(DEFAULT_NETWORK)
        self.registry.network_id = None

        self.class_defaults: Dict[str, Any] = dict(defaults or {})
        self.extensions: Dict[str, Any] = {}
        self.number_type = number_type
        self.synchronization_timeout = synchronization_timeout
        self.poll_interval = poll_interval
        self.transport: Optional[Transport] = None
        self.current_provider = None
        if provider is not None:
            self.set_provider(provider)

    def set_provider(self, provider: Any):
        self.transport = TransportBuilder.from_provider(provider)
        self.current_provider = provider

    def defaults(self, class_defaults: Optional[Mapping] = None) -> Dict[str, Any]:
        if class_defaults is None:
            class_defaults = {}
        for key, value in class_defaults.items():
            self.class_defaults[key] = value
        return self.class_defaults

    def extend(self, *mixins: Mapping):
        for mixin in mixins:
            for key, value in mixin.items():
                self.extensions[key] = value

    # network records

    @property
    def all_networks(self) -> Dict[str, DeploymentRecord]:
        return self.registry.all_networks

    @property
    def network_id(self) -> Optional[str]:
        return self.registry.network_id

    @property
    def abi(self) -> Optional[Abi]:
        return self.registry.abi

    @property
    def unlinked_binary(self) -> Optional[HexStr]:
        return self.registry.unlinked_binary

    @property
    def address(self) -> Optional[HexStr]:
        return self.registry.address

    @property
    def updated_at(self) -> Optional[int]:
        return self.registry.updated_at

    @property
    def links(self) -> Dict[str, HexStr]:
        return self.registry.links

    @property
    def binary(self) -> Optional[HexStr]:
        return self.registry.binary

    def networks(self) -> List[str]:
        return self.registry.networks()

    def set_network(self, network_id: str):
        self.registry.set_network(network_id)

    async def check_network(self):
        if self.registry.network_id is not None:
            return
        if self.transport is None:
            raise ProviderNotSetError(
                f"{self.contract_name} error: Please call set_provider() first before calling check_network()."
            )
        await self.registry.check_network(self.transport)

    def link(self, name: Union[str, Mapping], address: Optional[HexStr] = None):
        self.registry.link(name, address)

    def for_network(self, network_id: str) -> "ContractFactory":
        factory = ContractFactory(self.contract_name,
                                  defaults=self.class_defaults,
                                  number_type=self.number_type,
                                  synchronization_timeout=self.synchronization_timeout,
                                  poll_interval=self.poll_interval,
                                  generated_with=self.generated_with)
        factory.registry = self.registry.copy()
        factory.transport = self.transport
        factory.current_provider = self.current_provider
        factory.extensions = dict(self.extensions)
        factory.set_network(network_id)
        return factory

    # instances

    def new(self, *args: Any) -> Awaitable[BoundContract]:
        if self.transport is None:
            raise ProviderNotSetError(
                f"{self.contract_name} error: Please call set_provider() first before calling new()."
            )
        if not self.unlinked_binary:
            raise MissingBytecodeError(
                f"{self.contract_name} error: contract binary not set. Can't deploy new instance."
            )
        unlinked_libraries = self.registry.unlinked_libraries()
        if unlinked_libraries:
            raise UnresolvedLibrariesError(self.contract_name, unlinked_libraries)

        args, tx_options = split_tx_options(args, self.class_defaults, self.number_type)
        if tx_options.get("data") is None:
            tx_options["data"] = self.binary
        return self._deploy(args, tx_options)

    async def _deploy(self, args: List[Any], tx_options: TransactionOptions) -> BoundContract:
        transport = self.transport
        abi = self.abi or []
        snapshots = transport.deploy(abi, args, tx_options,
                                     timeout=self.synchronization_timeout,
                                     poll_interval=self.poll_interval)
        try:
            async for raw_contract in snapshots:
                # creation may be reported before the address is known
                if raw_contract is not None and raw_contract.address is not None:
                    self.logger.debug(f"{self.contract_name} deployed at {raw_contract.address}")
                    return BoundContract(self, raw_contract, abi)
        finally:
            aclose = getattr(snapshots, "aclose", None)
            if aclose is not None:
                await aclose()
        raise RuntimeError(f"{self.contract_name} error: deployment finished without a contract address")

    def at(self, address: HexStr) -> BoundContract:
        if address is None or not is_address_length(address):
            raise InvalidAddressError(f"Invalid address passed to {self.contract_name}.at(): {address}")
        if self.transport is None:
            raise ProviderNotSetError(
                f"{self.contract_name} error: Please call set_provider() first before calling at()."
            )
        abi = self.abi or []
        return BoundContract(self, self.transport.contract_at(abi, address), abi)

    def deployed(self) -> BoundContract:
        if not self.address:
            raise ContractNotDeployedError(
                f"Cannot find deployed address: {self.contract_name} not deployed or address not set."
            )
        return self.at(self.address)

    def __repr__(self):
        return f"<{type(self).__name__} {self.contract_name} network={self.network_id}>"
