"""
Settle a campaign's rewards: submit its Merkle root and data hash through the
Aptos CLI using a local profile. The CLI's exit status is returned unchanged.
"""
import argparse
import logging
from typing import List, Optional

from .. import constants
from ..config import DistributeRewardsConfig
from ..core.aptos_cli import AptosCli
from ..errors import AptosCliError
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)


def function_id(metrom: str) -> str:
    return f"{metrom}::{constants.MODULE_NAME}::distribute_rewards"


def function_args(config: DistributeRewardsConfig) -> List[str]:
    return [
        f'hex:["{config.campaign_id}"]',
        f'hex:["{config.root}"]',
        f'hex:["{config.data_hash}"]',
    ]


def distribute_rewards(config: DistributeRewardsConfig, cli: Optional[AptosCli] = None) -> int:
    config.validate()
    cli = cli or AptosCli()
    logger.info(f"Distributing rewards for campaign {config.campaign_id} (root: {config.root})")
    return cli.run_function(config.profile, function_id(config.metrom), function_args(config))


# --- COMMAND ---

def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--profile", default=constants.DEFAULT_PROFILE, help="The profile to use in the Aptos CLI")
    parser.add_argument("--metrom", required=True, help="The Metrom module address")
    parser.add_argument("--campaign-id", required=True, help="The id of the campaign to distribute rewards for")
    parser.add_argument("--root", required=True, help="The Merkle root")
    parser.add_argument("--data-hash", required=True, help="The data hash")


def run(args: argparse.Namespace, cli: Optional[AptosCli] = None) -> int:
    config = DistributeRewardsConfig(
        metrom=args.metrom,
        campaign_id=args.campaign_id,
        root=args.root,
        data_hash=args.data_hash,
        profile=args.profile,
    )
    try:
        return distribute_rewards(config, cli)
    except ValueError as e:
        logger.error(str(e))
        return 1
    except AptosCliError as e:
        logger.error(str(e))
        return e.returncode


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Distribute the rewards of a Metrom campaign")
    add_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging()
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
