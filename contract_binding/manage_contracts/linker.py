import copy
import logging
from collections.abc import Mapping
from typing import Dict, List, Optional, Union

from eth_typing import HexStr

from contract_binding.core.errors import NetworkNotFoundError
from contract_binding.core.types import (
    MAIN_NETWORK_ALIASES,
    MAIN_NETWORK_ID,
    Abi,
    DeploymentRecord,
)
from contract_binding.core.utils import find_unlinked_libraries, link_bytecode
from contract_binding.module.transport import Transport


class NetworkRegistry:
    """Deployment records of one contract keyed by network id.

    Exactly one record is active at a time. Selecting an unknown network makes
    an empty record active; it is up to the caller to notice missing fields.
    """
    logger = logging.getLogger("NetworkRegistry")

    def __init__(self, all_networks: Optional[Dict[str, DeploymentRecord]] = None, contract_name: str = "Contract"):
        self.all_networks: Dict[str, DeploymentRecord] = dict(all_networks or {})
        self.contract_name = contract_name
        self.active = DeploymentRecord()
        self.network_id: Optional[str] = None

    def copy(self) -> "NetworkRegistry":
        return NetworkRegistry(copy.deepcopy(self.all_networks), self.contract_name)

    def networks(self) -> List[str]:
        return list(self.all_networks.keys())

    def set_network(self, network_id: str):
        network_id = str(network_id)
        record = self.all_networks.get(network_id)
        if record is None:
            record = DeploymentRecord()
        self.active = record
        self.network_id = network_id

    def resolve_network_id(self, network_id: str) -> str:
        network_id = str(network_id)
        if network_id == MAIN_NETWORK_ID:
            for possible_id in MAIN_NETWORK_ALIASES:
                if possible_id in self.all_networks:
                    return possible_id
        return network_id

    async def check_network(self, transport: Transport):
        if self.network_id is not None:
            return
        live_id = await transport.network_id()
        network_id = self.resolve_network_id(str(live_id))
        if network_id not in self.all_networks:
            raise NetworkNotFoundError(
                f"{self.contract_name} error: Can't find artifacts for network id '{network_id}'"
            )
        self.logger.debug(f"{self.contract_name}: live network {live_id} uses artifacts of '{network_id}'")
        self.set_network(network_id)

    def link(self, name: Union[str, Mapping], address: Optional[HexStr] = None):
        if isinstance(name, Mapping):
            for library_name, library_address in name.items():
                self.link(library_name, library_address)
            return
        self.active.links[name] = address

    @property
    def abi(self) -> Optional[Abi]:
        return self.active.abi

    @property
    def unlinked_binary(self) -> Optional[HexStr]:
        return self.active.unlinked_binary

    @property
    def address(self) -> Optional[HexStr]:
        return self.active.address

    @property
    def updated_at(self) -> Optional[int]:
        return self.active.updated_at

    @property
    def links(self) -> Dict[str, HexStr]:
        return self.active.links

    @property
    def binary(self) -> Optional[HexStr]:
        if self.active.unlinked_binary is None:
            return None
        return link_bytecode(self.active.unlinked_binary, self.active.links)

    def unlinked_libraries(self) -> List[str]:
        return find_unlinked_libraries(self.binary)

