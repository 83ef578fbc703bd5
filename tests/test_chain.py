import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from aptos_sdk.transactions import EntryFunction

from metrom_aptos.config import NetworkEndpoints
from metrom_aptos.core.chain import AptosChainClient
from metrom_aptos.core.payload import PublishPayload
from metrom_aptos.errors import ChainError

NODE_URL = "https://fullnode.devnet.aptoslabs.com/v1"
FAUCET_URL = "https://faucet.devnet.aptoslabs.com"
ACCOUNT_ADDRESS = "0x" + "a" * 64
UPDATER = "0x" + "b" * 64
OWNER = "0x" + "c" * 64


class TestAptosChainClient(unittest.TestCase):
    def setUp(self):
        self.rest_patcher = patch("metrom_aptos.core.chain.RestClient")
        self.faucet_patcher = patch("metrom_aptos.core.chain.FaucetClient")
        self.mock_rest_cls = self.rest_patcher.start()
        self.mock_faucet_cls = self.faucet_patcher.start()

        self.rest_client = self.mock_rest_cls.return_value
        self.rest_client.create_bcs_signed_transaction = AsyncMock(return_value="signed")
        self.rest_client.submit_bcs_transaction = AsyncMock(return_value="0xinit")
        self.rest_client.wait_for_transaction = AsyncMock()
        self.rest_client.close = AsyncMock()
        self.mock_faucet_cls.return_value.fund_account = AsyncMock()

        self.sender = MagicMock()
        self.sender.address.return_value = ACCOUNT_ADDRESS

    def tearDown(self):
        self.faucet_patcher.stop()
        self.rest_patcher.stop()

    def _client(self, faucet_url=FAUCET_URL):
        return AptosChainClient(NetworkEndpoints(name="devnet", node_url=NODE_URL, faucet_url=faucet_url))

    def test_fund_account_uses_faucet(self):
        client = self._client()

        asyncio.run(client.fund_account(ACCOUNT_ADDRESS, 100_000_000))

        self.mock_faucet_cls.assert_called_once_with(FAUCET_URL, self.rest_client)
        self.mock_faucet_cls.return_value.fund_account.assert_awaited_once_with(ACCOUNT_ADDRESS, 100_000_000)

    def test_fund_account_without_faucet(self):
        client = AptosChainClient(NetworkEndpoints(name="mainnet", node_url=NODE_URL))

        with self.assertRaises(ChainError) as ctx:
            asyncio.run(client.fund_account(ACCOUNT_ADDRESS, 100_000_000))

        self.assertIn("no faucet is available on network mainnet", str(ctx.exception))
        self.mock_faucet_cls.assert_not_called()

    def test_init_state_encodes_addresses_then_u64s(self):
        client = self._client()

        txn_hash = asyncio.run(client.init_state(self.sender, OWNER, UPDATER, 10_000, 3600, 86400))

        self.assertEqual(txn_hash, "0xinit")
        sender, payload = self.rest_client.create_bcs_signed_transaction.await_args[0]
        self.assertIs(sender, self.sender)
        entry_function = payload.value
        self.assertIsInstance(entry_function, EntryFunction)
        self.assertEqual(str(entry_function.module.address), ACCOUNT_ADDRESS)
        self.assertEqual(entry_function.module.name, "metrom")
        self.assertEqual(entry_function.function, "init_state")
        self.assertEqual(entry_function.ty_args, [])
        self.assertEqual(entry_function.args, [
            bytes.fromhex("c" * 64),
            bytes.fromhex("b" * 64),
            (10_000).to_bytes(8, "little"),
            (3600).to_bytes(8, "little"),
            (86400).to_bytes(8, "little"),
        ])
        self.rest_client.submit_bcs_transaction.assert_awaited_once_with("signed")

    @patch("metrom_aptos.core.chain.PackagePublisher")
    def test_publish_package_sends_payload_bytes(self, mock_publisher_cls):
        mock_publisher_cls.return_value.publish_package = AsyncMock(return_value="0xpublish")
        payload = PublishPayload(metadata_hex="0x066d", modules_hex=["0xa11ceb0b", "0x0102"])
        client = self._client()

        txn_hash = asyncio.run(client.publish_package(self.sender, payload))

        self.assertEqual(txn_hash, "0xpublish")
        mock_publisher_cls.assert_called_once_with(self.rest_client)
        mock_publisher_cls.return_value.publish_package.assert_awaited_once_with(
            self.sender, bytes.fromhex("066d"), [bytes.fromhex("a11ceb0b"), bytes.fromhex("0102")]
        )

    @patch("metrom_aptos.core.chain.requests.get")
    def test_get_account_modules(self, mock_get):
        mock_get.return_value = MagicMock(status_code=200)
        mock_get.return_value.json.return_value = [{"bytecode": "0xa11ceb0b"}]
        client = self._client()

        modules = client.get_account_modules(ACCOUNT_ADDRESS)

        self.assertEqual(modules, [{"bytecode": "0xa11ceb0b"}])
        mock_get.assert_called_once_with(f"{NODE_URL}/accounts/{ACCOUNT_ADDRESS}/modules", timeout=30)

    @patch("metrom_aptos.core.chain.requests.get")
    def test_get_account_modules_error_status(self, mock_get):
        mock_get.return_value = MagicMock(status_code=404, text="account_not_found")
        client = self._client()

        with self.assertRaises(ChainError) as ctx:
            client.get_account_modules(ACCOUNT_ADDRESS)

        self.assertIn("returned 404: account_not_found", str(ctx.exception))

    def test_wait_and_close_delegate_to_rest_client(self):
        client = self._client()

        asyncio.run(client.wait_for_transaction("0xpublish"))
        asyncio.run(client.close())

        self.rest_client.wait_for_transaction.assert_awaited_once_with("0xpublish")
        self.rest_client.close.assert_awaited_once()


if __name__ == "__main__":
    unittest.main()
