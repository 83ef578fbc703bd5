"""
Set the minimum reward ratio accepted for a token, through the Aptos CLI.
"""
import argparse
import logging
from typing import List, Optional

from .. import constants
from ..config import SetMinimumRewardTokenRatioConfig
from ..core.aptos_cli import AptosCli
from ..errors import AptosCliError
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)


def function_id(metrom: str) -> str:
    # The on-chain entry function is named "rate", not "ratio"
    return f"{metrom}::{constants.MODULE_NAME}::set_minimum_reward_token_rate"


def function_args(config: SetMinimumRewardTokenRatioConfig) -> List[str]:
    return [f"address:{config.token}", f"u64:{config.ratio}"]


def set_minimum_reward_token_ratio(config: SetMinimumRewardTokenRatioConfig, cli: Optional[AptosCli] = None) -> int:
    config.validate()
    cli = cli or AptosCli()
    logger.info(f"Setting minimum reward token ratio of {config.token} to {config.ratio}")
    return cli.run_function(config.profile, function_id(config.metrom), function_args(config))


# --- COMMAND ---

def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--profile", default=constants.DEFAULT_PROFILE, help="The profile to use in the Aptos CLI")
    parser.add_argument("--metrom", required=True, help="The Metrom module address")
    parser.add_argument("--token", required=True, help="The token of which to set the ratio")
    parser.add_argument("--ratio", required=True, help="The ratio")


def run(args: argparse.Namespace, cli: Optional[AptosCli] = None) -> int:
    config = SetMinimumRewardTokenRatioConfig(
        metrom=args.metrom,
        token=args.token,
        ratio=args.ratio,
        profile=args.profile,
    )
    try:
        return set_minimum_reward_token_ratio(config, cli)
    except ValueError as e:
        logger.error(str(e))
        return 1
    except AptosCliError as e:
        logger.error(str(e))
        return e.returncode


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Set the minimum reward token ratio of a Metrom token")
    add_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging()
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
