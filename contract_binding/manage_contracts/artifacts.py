import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from contract_binding.core.types import DEFAULT_NETWORK


@dataclass
class ContractArtifact:
    contract_name: str
    networks: Dict[str, Dict[str, Any]]
    generated_with: Optional[str] = None


def parse_artifact(data: Dict[str, Any], contract_name: Optional[str] = None) -> ContractArtifact:
    """Reads a compiled contract artifact.

    Per-network artifacts keep their records under ``networks`` (or
    ``all_networks``). A flat artifact with ``abi`` and bytecode at the top
    level becomes the ``default`` network.
    """
    name = data.get("contract_name") or data.get("contractName") or contract_name or "Contract"
    if "all_networks" in data:
        networks = data["all_networks"]
    elif "networks" in data and "abi" not in data:
        networks = data["networks"]
    elif "abi" in data:
        networks = {DEFAULT_NETWORK: data}
    else:
        raise ValueError(f"Artifact of {name} has neither an abi nor network records")

    networks = {str(network_id): record for network_id, record in networks.items()}
    return ContractArtifact(contract_name=name,
                            networks=networks,
                            generated_with=data.get("generated_with"))


def load_artifact(compiled_contract: Union[Path, str]) -> ContractArtifact:
    compiled_contract = Path(compiled_contract)
    with compiled_contract.open(mode='r') as json_f:
        data = json.load(json_f)
    return parse_artifact(data, contract_name=compiled_contract.stem.split(".")[0])
