import asyncio
import logging
import os
import sys
from pathlib import Path

from contract_binding.manage_contracts.contract_factory import ContractFactory


async def deploy_and_call(rpc_url: str, compiled_contract: Path, sender: str):
    """Deploy a contract from its artifact and exercise one query and one transaction

    :param rpc_url:
        URL of a node that accepts eth_sendTransaction for ``sender``

    :param compiled_contract:
        Artifact with ``abi`` and ``unlinked_binary`` per network.

    :param sender:
        Unlocked account used as the ``from`` of every transaction.
    """
    factory = ContractFactory.from_json(compiled_contract, provider=rpc_url)

    # Every call made through this factory is sent from the same account
    factory.defaults({"from": sender, "gas": 3_000_000})

    # Pick the artifacts matching the node we are connected to
    await factory.check_network()
    print(f"Using artifacts of network: {factory.network_id}")

    # Deploy and wait until the contract has an address
    registry = await factory.new()
    print(f"{factory.contract_name} deployed at: {registry.address}")

    name = b"example".ljust(32, b"\0")

    # Non constant function: submitted and confirmed before returning
    tx_hash, receipt = await registry.initiateContract(name)
    print(f"initiateContract mined in block {receipt['blockNumber']}: {tx_hash}")

    # Constant function: plain eth_call
    address = await registry.getContractAddr(name)
    print(f"Contract registered under 'example': {address}")


if __name__ == "__main__":
    logging.basicConfig(stream=sys.stdout, level=logging.DEBUG)
    rpc_url = os.getenv("CONTRACT_BINDING_RPC_URL", "http://127.0.0.1:8545")
    sender = os.getenv("CONTRACT_BINDING_SENDER")
    if sender is None:
        raise LookupError("Set CONTRACT_BINDING_SENDER to an unlocked account address")

    artifact = Path(sys.argv[1])
    asyncio.run(deploy_and_call(rpc_url, artifact, sender))
