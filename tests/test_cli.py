import json
import unittest
from unittest.mock import MagicMock, patch

from metrom_aptos.__main__ import build_parser, main

DEVNET_ADDRESS = "0x280de537562f50a78bba408ac0ea6c9ea8e661222e22734cc8315d8b3341a705"


class TestMain(unittest.TestCase):
    @patch("builtins.print")
    def test_addresses_prints_every_registry(self, mock_print):
        status = main(["addresses"])

        self.assertEqual(status, 0)
        output = json.loads(mock_print.call_args[0][0])
        self.assertEqual(output, {
            "metrom": {"devnet": {"address": DEVNET_ADDRESS, "blockCreated": 15406126}},
        })

    @patch("builtins.print")
    def test_addresses_single_chain(self, mock_print):
        status = main(["addresses", "--registry", "metrom", "--chain", "devnet"])

        self.assertEqual(status, 0)
        output = json.loads(mock_print.call_args[0][0])
        self.assertEqual(output, {"metrom": {"address": DEVNET_ADDRESS, "blockCreated": 15406126}})

    @patch("builtins.print")
    def test_addresses_unknown_chain(self, mock_print):
        self.assertEqual(main(["addresses", "--chain", "mainnet"]), 1)

    @patch("builtins.print")
    def test_addresses_unknown_registry(self, mock_print):
        self.assertEqual(main(["addresses", "--registry", "metrom-v0"]), 1)

    @patch("metrom_aptos.workflows.publish_package.AptosChainClient")
    def test_publish_with_unknown_network(self, mock_chain_cls):
        status = main([
            "publish-package",
            "--network", "moonnet",
            "--updater", "0x" + "b" * 64,
            "--fee", "10000",
            "--minimum-campaign-duration", "3600",
            "--maximum-campaign-duration", "86400",
        ])

        self.assertEqual(status, 1)
        mock_chain_cls.assert_not_called()

    @patch("metrom_aptos.core.aptos_cli.subprocess.run")
    def test_distribute_rewards_subcommand(self, mock_run):
        mock_run.return_value = MagicMock(returncode=5)

        status = main([
            "distribute-rewards",
            "--metrom", DEVNET_ADDRESS,
            "--campaign-id", "5",
            "--root", "0xabc",
            "--data-hash", "0xdef",
        ])

        self.assertEqual(status, 5)
        self.assertIn('hex:["5"]', mock_run.call_args[0][0])

    def test_subcommand_is_required(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args([])

    def test_fee_must_be_an_integer(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args([
                "publish-package", "--network", "devnet", "--updater", "0x1", "--fee", "ten",
                "--minimum-campaign-duration", "1", "--maximum-campaign-duration", "2",
            ])


if __name__ == "__main__":
    unittest.main()
