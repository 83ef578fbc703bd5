"""
Publish the Metrom package from a fresh account and initialize its state.

    metrom-publish-package --network devnet --updater 0x... --fee 10000 \
        --minimum-campaign-duration 3600 --maximum-campaign-duration 31536000

The generated account becomes the module address and, unless --owner is
given, the owner of the deployment. Every step must succeed; a failure stops
the run with exit status 1 and leaves whatever already happened on-chain
(e.g. a funded account) as is.
"""
import argparse
import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .. import constants
from ..config import PublishConfig
from ..core.aptos_cli import AptosCli
from ..core.chain import AptosChainClient
from ..core.payload import PublishPayload, load_publish_payload, normalize_hex
from ..core.pipeline import Pipeline, PipelineResult, Step, StepResult
from ..core.progress import LoggingProgressReporter, ProgressReporter
from ..errors import StepFailed
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    account_address: Optional[str] = None
    owner: Optional[str] = None
    publish_hash: Optional[str] = None
    init_hash: Optional[str] = None
    steps: List[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.steps) and all(step.ok for step in self.steps)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class PublishWorkflow:
    """
    Runs the publish-and-initialize steps against a chain client.

    chain is any object exposing the AptosChainClient operations, so tests and
    embedding callers can substitute their own.
    """

    def __init__(self, config: PublishConfig, chain, cli: AptosCli, reporter: ProgressReporter):
        self.config = config
        self.chain = chain
        self.cli = cli
        self.reporter = reporter

        self.account = None
        self.payload: Optional[PublishPayload] = None
        self.result = PublishResult()

    def steps(self) -> List[Step]:
        return [
            Step("generate_account", "Generating deployment account", self.generate_account,
                 "Could not generate deployment account"),
            Step("fund_account", "Funding deployment account", self.fund_account,
                 "Could not fund deployment account"),
            Step("compile", "Compiling package", self.compile_package,
                 "Error compiling the package"),
            Step("publish", "Publishing the package on-chain", self.publish,
                 "Transaction broadcast failed"),
            Step("check", "Checking the on-chain deployment", self.check_deployment,
                 "Check failed"),
            Step("init_state", "Initializing the package on-chain", self.init_state,
                 "Init state transaction broadcast failed"),
        ]

    async def run(self) -> PublishResult:
        self.check_cli()
        pipeline_result: PipelineResult = await Pipeline(self.reporter).run(self.steps())
        self.result.steps = pipeline_result.steps
        return self.result

    def check_cli(self) -> None:
        if not self.cli.is_installed():
            self.reporter.warn(
                "check_cli",
                "The Aptos CLI is not installed. Please install it from the instructions on aptos.dev",
            )

    # --- STEPS ---

    def generate_account(self, update: Callable[[str], None]) -> str:
        self.account = self.chain.generate_account()
        address = str(self.account.address())
        self.result.account_address = address
        self.result.owner = self.config.owner or address
        return f"Deployment account with address {address} generated (will be the module's address)"

    async def fund_account(self, update: Callable[[str], None]) -> str:
        await self.chain.fund_account(self.account.address(), self.config.funding_amount)
        return "Deployment account funded"

    def compile_package(self, update: Callable[[str], None]) -> str:
        payload_dir = os.path.dirname(self.config.payload_path)
        if payload_dir:
            os.makedirs(payload_dir, exist_ok=True)
        self.cli.build_publish_payload(
            self.config.payload_path,
            {constants.NAMED_ADDRESS: self.result.account_address},
            package_dir=self.config.package_dir,
        )
        self.payload = load_publish_payload(self.config.payload_path)
        return "Package compiled"

    async def publish(self, update: Callable[[str], None]) -> str:
        txn_hash = await self.chain.publish_package(self.account, self.payload)
        self.result.publish_hash = txn_hash
        update(f"Publish transaction broadcast on-chain with hash {txn_hash}")
        await self.chain.wait_for_transaction(txn_hash)
        return f"Publish transaction confirmed on-chain (hash: {txn_hash})"

    def check_deployment(self, update: Callable[[str], None]) -> str:
        modules = self.chain.get_account_modules(self.account.address())
        if len(modules) != 1:
            raise StepFailed(
                f"Check failed: expected 1 module to be published, but {len(modules)} were instead"
            )
        local_bytecode = [normalize_hex(module) for module in self.payload.modules_hex]
        if normalize_hex(modules[0].get("bytecode", "")) not in local_bytecode:
            raise StepFailed(
                "Check failed: the published module's bytecode does not match the locally built one"
            )
        return "On-chain checks passed"

    async def init_state(self, update: Callable[[str], None]) -> str:
        txn_hash = await self.chain.init_state(
            self.account,
            self.result.owner,
            self.config.updater,
            self.config.fee,
            self.config.minimum_campaign_duration,
            self.config.maximum_campaign_duration,
        )
        self.result.init_hash = txn_hash
        update(f"Init state transaction broadcast on-chain with hash {txn_hash}")
        await self.chain.wait_for_transaction(txn_hash)
        return f"Init state transaction confirmed on-chain (hash: {txn_hash})"


# --- COMMAND ---

def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--network", required=True, help="The network on which to deploy")
    parser.add_argument("--updater", required=True, help="The updater of the contract")
    parser.add_argument("--fee", required=True, type=int, help="The initial fee (in ppm)")
    parser.add_argument("--minimum-campaign-duration", required=True, type=int,
                        help="The initial minimum campaign duration in seconds")
    parser.add_argument("--maximum-campaign-duration", required=True, type=int,
                        help="The initial maximum campaign duration in seconds")
    parser.add_argument("--owner", help="The owner of the contract (defaults to the deployment account)")
    parser.add_argument("--payload-path", default=constants.PUBLISH_PAYLOAD_PATH,
                        help="Where to write the compiled publish payload")
    parser.add_argument("--package-dir", help="Path of the Move package to compile")


def config_from_args(args: argparse.Namespace) -> PublishConfig:
    return PublishConfig(
        network=args.network,
        updater=args.updater,
        fee=args.fee,
        minimum_campaign_duration=args.minimum_campaign_duration,
        maximum_campaign_duration=args.maximum_campaign_duration,
        owner=args.owner,
        payload_path=args.payload_path,
        package_dir=args.package_dir,
    )


async def publish_package(
    config: PublishConfig,
    reporter: Optional[ProgressReporter] = None,
    cli: Optional[AptosCli] = None,
) -> PublishResult:
    """Validate the config, then run the full workflow against the configured network."""
    config.validate()
    chain = AptosChainClient(config.endpoints)
    try:
        workflow = PublishWorkflow(config, chain, cli or AptosCli(), reporter or LoggingProgressReporter())
        return await workflow.run()
    finally:
        await chain.close()


def run(args: argparse.Namespace) -> int:
    config = config_from_args(args)
    try:
        result = asyncio.run(publish_package(config))
    except ValueError as e:
        logger.error(str(e))
        return 1

    if result.ok:
        logger.info(f"Metrom deployed at {result.account_address} (owner: {result.owner})")
    return result.exit_code


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Publish and initialize the Metrom package")
    add_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging()
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
