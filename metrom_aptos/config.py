from dataclasses import dataclass, field
from typing import Optional

from aptos_sdk.account_address import AccountAddress

from . import constants


@dataclass
class NetworkEndpoints:
    name: str
    node_url: str
    faucet_url: Optional[str] = None


def resolve_network(name: str) -> NetworkEndpoints:
    """
    Resolve the REST and faucet endpoints for a network name.

    APTOS_NODE_URL / APTOS_FAUCET_URL override the built-in endpoints of any
    network and are the only source for the "custom" network.
    """
    if name not in constants.SUPPORTED_NETWORKS:
        raise ValueError(
            f'Invalid network "{name}" provided; valid values are: {", ".join(constants.SUPPORTED_NETWORKS)}'
        )
    node_url = constants.APTOS_NODE_URL or constants.NODE_URLS.get(name)
    if not node_url:
        raise ValueError(f'Network "{name}" requires the APTOS_NODE_URL environment variable')
    faucet_url = constants.APTOS_FAUCET_URL or constants.FAUCET_URLS.get(name)
    return NetworkEndpoints(name=name, node_url=node_url.rstrip("/"), faucet_url=faucet_url)


def check_account_address(name: str, value: str) -> None:
    """Raise ValueError unless value parses as an Aptos account address."""
    try:
        AccountAddress.from_str(value)
    except (RuntimeError, ValueError) as e:
        raise ValueError(f"{name} is not a valid account address ({value!r}): {e}") from e


@dataclass
class PublishConfig:
    """
    Everything the publish-and-initialize workflow needs, built once per run.

    owner defaults to the freshly generated deployment account when left unset.
    """

    network: str
    updater: str
    fee: int
    minimum_campaign_duration: int
    maximum_campaign_duration: int
    owner: Optional[str] = None

    payload_path: str = constants.PUBLISH_PAYLOAD_PATH
    package_dir: Optional[str] = None
    funding_amount: int = constants.FUNDING_AMOUNT_OCTAS

    endpoints: Optional[NetworkEndpoints] = field(default=None, repr=False)

    def validate(self) -> None:
        self.endpoints = resolve_network(self.network)

        if not self.updater:
            raise ValueError("updater is required")
        check_account_address("updater", self.updater)
        if self.owner is not None:
            check_account_address("owner", self.owner)
        for name in ("fee", "minimum_campaign_duration", "maximum_campaign_duration", "funding_amount"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
            if value > constants.MAX_U64:
                raise ValueError(f"{name} does not fit in a u64, got {value}")
        if self.fee > constants.MAX_FEE_PPM:
            raise ValueError(f"fee is expressed in ppm and must be at most {constants.MAX_FEE_PPM}, got {self.fee}")
        if self.minimum_campaign_duration > self.maximum_campaign_duration:
            raise ValueError(
                "minimum_campaign_duration must not exceed maximum_campaign_duration "
                f"({self.minimum_campaign_duration} > {self.maximum_campaign_duration})"
            )
        if not self.payload_path:
            raise ValueError("payload_path is required")


@dataclass
class DistributeRewardsConfig:
    metrom: str
    campaign_id: str
    root: str
    data_hash: str
    profile: str = constants.DEFAULT_PROFILE

    def validate(self) -> None:
        for name in ("metrom", "campaign_id", "root", "data_hash", "profile"):
            if not getattr(self, name):
                raise ValueError(f"{name} is required")


@dataclass
class SetMinimumRewardTokenRatioConfig:
    metrom: str
    token: str
    ratio: str
    profile: str = constants.DEFAULT_PROFILE

    def validate(self) -> None:
        for name in ("metrom", "token", "ratio", "profile"):
            if not getattr(self, name):
                raise ValueError(f"{name} is required")
