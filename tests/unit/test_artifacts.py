from unittest import TestCase

from contract_binding.manage_contracts.artifacts import parse_artifact
from contract_binding.manage_contracts.contract_factory import ContractFactory
from tests.contracts.utils import contract_json, contract_path


class ArtifactTest(TestCase):

    def test_all_networks_artifact(self):
        artifact = parse_artifact(contract_json("RightsContractFactory.json"))
        self.assertEqual(artifact.contract_name, "RightsContractFactory")
        self.assertEqual(artifact.generated_with, "3.1.2")
        self.assertEqual(list(artifact.networks.keys()), ["default"])

    def test_networks_artifact(self):
        artifact = parse_artifact(contract_json("LinkedRegistry.json"))
        self.assertEqual(sorted(artifact.networks.keys()), ["3", "default"])

    def test_flat_artifact_becomes_default_network(self):
        data = {"contractName": "Counter", "abi": [], "bytecode": "0x6080", "networks": {}}
        artifact = parse_artifact(data)
        self.assertEqual(artifact.contract_name, "Counter")
        self.assertEqual(artifact.networks, {"default": data})

    def test_numeric_network_ids_become_strings(self):
        artifact = parse_artifact({"contract_name": "C", "all_networks": {1: {"abi": []}}})
        self.assertEqual(list(artifact.networks.keys()), ["1"])

    def test_artifact_without_abi(self):
        with self.assertRaises(ValueError):
            parse_artifact({"contract_name": "Broken"})

    def test_factory_from_flat_artifact(self):
        factory = ContractFactory.from_artifact({"contract_name": "Counter", "abi": [], "bytecode": "0x6080"})
        self.assertEqual(factory.contract_name, "Counter")
        self.assertEqual(factory.binary, "0x6080")
        self.assertIsNone(factory.address)
        self.assertIsNone(factory.network_id)

    def test_factory_keeps_generator_version(self):
        with contract_path("RightsContractFactory.json") as path:
            factory = ContractFactory.from_json(path)
        self.assertEqual(factory.generated_with, "3.1.2")
        self.assertEqual(factory.for_network("3").generated_with, "3.1.2")
        self.assertIsNone(ContractFactory.from_artifact({"abi": []}).generated_with)
