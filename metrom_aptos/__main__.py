import argparse
import json
import sys

from . import constants
from .addresses import REGISTRIES
from .errors import UnsupportedChainError
from .logging_config import setup_logging
from .workflows import distribute_rewards, publish_package, set_minimum_reward_token_ratio


def show_addresses(args: argparse.Namespace) -> int:
    registries = REGISTRIES
    if args.registry:
        if args.registry not in REGISTRIES:
            print(f"Unknown registry {args.registry!r}; known registries are: {', '.join(REGISTRIES)}", file=sys.stderr)
            return 1
        registries = {args.registry: REGISTRIES[args.registry]}

    if args.chain:
        try:
            output = {name: registry.resolve(args.chain).to_dict() for name, registry in registries.items()}
        except UnsupportedChainError as e:
            print(str(e), file=sys.stderr)
            return 1
    else:
        output = {name: registry.to_dict() for name, registry in registries.items()}

    print(json.dumps(output, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="metrom-aptos", description="Metrom Aptos deployment tooling")
    parser.add_argument("--log-level", default=constants.LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--log-format", default=constants.LOG_FORMAT, choices=["text", "json"],
                        help="Console log format")
    parser.add_argument("--log-file", help="Also write structured logs to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    publish = subparsers.add_parser("publish-package", help="Publish and initialize the Metrom package")
    publish_package.add_arguments(publish)
    publish.set_defaults(handler=publish_package.run)

    distribute = subparsers.add_parser("distribute-rewards", help="Distribute the rewards of a campaign")
    distribute_rewards.add_arguments(distribute)
    distribute.set_defaults(handler=distribute_rewards.run)

    ratio = subparsers.add_parser("set-minimum-reward-token-ratio", help="Set the minimum reward ratio of a token")
    set_minimum_reward_token_ratio.add_arguments(ratio)
    ratio.set_defaults(handler=set_minimum_reward_token_ratio.run)

    addresses = subparsers.add_parser("addresses", help="Print the deployed contract addresses")
    addresses.add_argument("--registry", help="Only print this registry")
    addresses.add_argument("--chain", help="Only print the entry of this chain")
    addresses.set_defaults(handler=show_addresses)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, log_format=args.log_format, log_file=args.log_file)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
