import logging
from typing import Any, Dict, List, Optional

import requests
from aptos_sdk.account import Account
from aptos_sdk.account_address import AccountAddress
from aptos_sdk.async_client import FaucetClient, RestClient
from aptos_sdk.bcs import Serializer
from aptos_sdk.package_publisher import PackagePublisher
from aptos_sdk.transactions import EntryFunction, TransactionArgument, TransactionPayload

from .. import constants
from ..config import NetworkEndpoints
from ..errors import ChainError
from .payload import PublishPayload

logger = logging.getLogger(__name__)


class AptosChainClient:
    """
    On-chain operations needed to deploy the Metrom package.

    Transactions go through the Aptos Python SDK; module listing is a plain
    REST read against the same fullnode.
    """

    def __init__(self, endpoints: NetworkEndpoints, timeout_seconds: int = 30):
        self.endpoints = endpoints
        self.timeout_seconds = timeout_seconds
        self.rest_client = RestClient(endpoints.node_url)
        self.faucet_client: Optional[FaucetClient] = None
        if endpoints.faucet_url:
            self.faucet_client = FaucetClient(endpoints.faucet_url, self.rest_client)

    def generate_account(self) -> Account:
        return Account.generate()

    async def fund_account(self, address: AccountAddress, amount: int) -> None:
        if self.faucet_client is None:
            raise ChainError(f"no faucet is available on network {self.endpoints.name}")
        await self.faucet_client.fund_account(address, amount)

    async def publish_package(self, sender: Account, payload: PublishPayload) -> str:
        """Sign and submit 0x1::code::publish_package_txn; returns the transaction hash."""
        publisher = PackagePublisher(self.rest_client)
        return await publisher.publish_package(sender, payload.metadata, payload.modules)

    async def init_state(
        self,
        sender: Account,
        owner: str,
        updater: str,
        fee: int,
        minimum_campaign_duration: int,
        maximum_campaign_duration: int,
    ) -> str:
        """Sign and submit <sender>::metrom::init_state; returns the transaction hash."""
        entry_function = EntryFunction.natural(
            f"{sender.address()}::{constants.MODULE_NAME}",
            "init_state",
            [],
            [
                TransactionArgument(AccountAddress.from_str(owner), Serializer.struct),
                TransactionArgument(AccountAddress.from_str(updater), Serializer.struct),
                TransactionArgument(fee, Serializer.u64),
                TransactionArgument(minimum_campaign_duration, Serializer.u64),
                TransactionArgument(maximum_campaign_duration, Serializer.u64),
            ],
        )
        signed_transaction = await self.rest_client.create_bcs_signed_transaction(
            sender, TransactionPayload(entry_function)
        )
        return await self.rest_client.submit_bcs_transaction(signed_transaction)

    async def wait_for_transaction(self, txn_hash: str) -> None:
        await self.rest_client.wait_for_transaction(txn_hash)

    def get_account_modules(self, address: AccountAddress) -> List[Dict[str, Any]]:
        """
        List the modules published under address.

        This is a blocking requests call made straight to the fullnode, so it
        does not share the RestClient's headers or API key. The publish steps
        run one at a time, so nothing else is waiting on the event loop while
        it blocks.
        """
        url = f"{self.endpoints.node_url}/accounts/{address}/modules"
        response = requests.get(url, timeout=self.timeout_seconds)
        if response.status_code != 200:
            raise ChainError(f"GET {url} returned {response.status_code}: {response.text[:200]}")
        return response.json()

    async def close(self) -> None:
        await self.rest_client.close()
