from unittest import IsolatedAsyncioTestCase, TestCase
from unittest.mock import AsyncMock, MagicMock, call

from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TimeExhausted, TransactionNotFound

from contract_binding.module.module_builder import TransportBuilder
from contract_binding.module.provider import LoggingAsyncHTTPProvider
from contract_binding.module.web3_transport import Web3RawContract, Web3RawFunction, Web3Transport

ADDRESS = "0x" + "ab" * 20
SENDER = "0x36615Cf349d7F6344891B1e7CA7C72883F5dc049"
TX_HASH_BYTES = HexBytes(b"\x12" * 32)
TX_HASH = "0x" + "12" * 32
ABI = [
    {"type": "function", "name": "lookup", "constant": True, "inputs": [], "outputs": []},
    {"type": "event", "name": "Stored", "inputs": [], "anonymous": False},
]


def mock_web3() -> MagicMock:
    web3 = MagicMock()
    web3.eth.get_transaction_receipt = AsyncMock()
    return web3


class Web3RawFunctionTest(IsolatedAsyncioTestCase):

    def setUp(self) -> None:
        self.contract = MagicMock()
        self.bound = self.contract.functions.lookup.return_value
        self.function = Web3RawFunction(self.contract, "lookup")

    async def test_call(self):
        self.bound.call = AsyncMock(return_value=7)
        result = await self.function.call([1, "a"], {"from": SENDER})
        self.assertEqual(result, 7)
        self.contract.functions.lookup.assert_called_with(1, "a")
        self.bound.call.assert_awaited_once_with({"from": SENDER})

    async def test_send_transaction_returns_hex_hash(self):
        self.bound.transact = AsyncMock(return_value=TX_HASH_BYTES)
        tx_hash = await self.function.send_transaction([], {"from": SENDER, "gas": 100})
        self.assertEqual(tx_hash, TX_HASH)
        self.bound.transact.assert_awaited_once_with({"from": SENDER, "gas": 100})

    async def test_estimate_gas(self):
        self.bound.estimate_gas = AsyncMock(return_value=21000)
        self.assertEqual(await self.function.estimate_gas([2], {}), 21000)
        self.contract.functions.lookup.assert_called_with(2)

    async def test_build_transaction(self):
        self.bound.build_transaction = AsyncMock(return_value={"to": ADDRESS, "nonce": 3})
        tx = await self.function.build_transaction([], {"nonce": 3})
        self.assertEqual(tx, {"to": ADDRESS, "nonce": 3})
        self.bound.build_transaction.assert_awaited_once_with({"nonce": 3})


class Web3RawContractTest(TestCase):

    def test_address_is_checksummed(self):
        web3 = mock_web3()
        raw = Web3RawContract(web3, ABI, address=ADDRESS)
        checksum = Web3.to_checksum_address(ADDRESS)
        self.assertEqual(raw.address, checksum)
        web3.eth.contract.assert_called_once_with(address=checksum, abi=ABI)

    def test_events(self):
        web3 = mock_web3()
        raw = Web3RawContract(web3, ABI, address=ADDRESS)
        events = web3.eth.contract.return_value.events
        self.assertIs(raw.event("Stored"), events.Stored)
        self.assertIs(raw.all_events, events)

    def test_pending_contract_has_no_functions(self):
        web3 = mock_web3()
        raw = Web3RawContract(web3, ABI, transaction_hash=TX_HASH)
        self.assertIsNone(raw.address)
        web3.eth.contract.assert_not_called()
        with self.assertRaises(RuntimeError):
            raw.function("lookup")


class Web3TransportTest(IsolatedAsyncioTestCase):

    def setUp(self) -> None:
        self.web3 = mock_web3()
        self.transport = Web3Transport(self.web3)

    async def test_missing_receipt_is_none(self):
        self.web3.eth.get_transaction_receipt.side_effect = TransactionNotFound("not found")
        self.assertIsNone(await self.transport.get_transaction_receipt(TX_HASH))

    async def test_receipt(self):
        self.web3.eth.get_transaction_receipt.return_value = {"status": 1}
        self.assertEqual(await self.transport.get_transaction_receipt(TX_HASH), {"status": 1})
        self.web3.eth.get_transaction_receipt.assert_awaited_once_with(TX_HASH)

    async def test_receipt_errors_propagate(self):
        self.web3.eth.get_transaction_receipt.side_effect = ConnectionError("down")
        with self.assertRaises(ConnectionError):
            await self.transport.get_transaction_receipt(TX_HASH)

    async def test_network_id_is_string(self):
        async def version():
            return 5

        self.web3.net.version = version()
        self.assertEqual(await self.transport.network_id(), "5")

    async def test_deploy_yields_pending_then_mined(self):
        contract_cls = self.web3.eth.contract.return_value
        contract_cls.constructor.return_value.transact = AsyncMock(return_value=TX_HASH_BYTES)
        self.web3.eth.get_transaction_receipt.side_effect = [
            TransactionNotFound("pending"),
            {"contractAddress": ADDRESS},
        ]

        snapshots = [
            raw async for raw in self.transport.deploy(ABI, [5], {"from": SENDER, "data": "0x6080"},
                                                       poll_interval=0)
        ]

        self.assertEqual(len(snapshots), 2)
        pending, mined = snapshots
        self.assertIsNone(pending.address)
        self.assertEqual(pending.transaction_hash, TX_HASH)
        self.assertEqual(mined.address, Web3.to_checksum_address(ADDRESS))
        self.assertEqual(mined.transaction_hash, TX_HASH)
        self.assertEqual(self.web3.eth.contract.call_args_list[0], call(abi=ABI, bytecode="0x6080"))
        contract_cls.constructor.assert_called_once_with(5)
        contract_cls.constructor.return_value.transact.assert_awaited_once_with({"from": SENDER})
        self.assertEqual(self.web3.eth.get_transaction_receipt.await_count, 2)

    async def test_deploy_times_out(self):
        contract_cls = self.web3.eth.contract.return_value
        contract_cls.constructor.return_value.transact = AsyncMock(return_value=TX_HASH_BYTES)
        self.web3.eth.get_transaction_receipt.side_effect = TransactionNotFound("pending")

        snapshots = self.transport.deploy(ABI, [], {"data": "0x6080"}, timeout=0.001, poll_interval=0)
        pending = await snapshots.__anext__()
        self.assertIsNone(pending.address)
        with self.assertRaises(TimeExhausted):
            await snapshots.__anext__()


class TransportBuilderTest(TestCase):

    def test_build_from_url(self):
        transport = TransportBuilder.build("http://127.0.0.1:8545")
        self.assertIsInstance(transport, Web3Transport)
        self.assertIsInstance(transport.web3.provider, LoggingAsyncHTTPProvider)

    def test_transport_is_kept(self):
        transport = Web3Transport(mock_web3())
        self.assertIs(TransportBuilder.from_provider(transport), transport)
