import importlib.resources as pkg_resources
import json
from typing import Any, Dict

from tests import contracts


def contract_path(contract_name: str):
    return pkg_resources.path(contracts, contract_name)


def contract_json(contract_name: str) -> Dict[str, Any]:
    with contract_path(contract_name) as p:
        with p.open(mode="r") as json_file:
            return json.load(json_file)
