from .addresses import ADDRESS, REGISTRIES, AddressFormat, ChainContract, ChainRegistry, Provenance, SupportedChain
from .config import DistributeRewardsConfig, PublishConfig, SetMinimumRewardTokenRatioConfig

__version__ = "0.1.0"

__all__ = [
    "ADDRESS",
    "REGISTRIES",
    "AddressFormat",
    "ChainContract",
    "ChainRegistry",
    "Provenance",
    "SupportedChain",
    "PublishConfig",
    "DistributeRewardsConfig",
    "SetMinimumRewardTokenRatioConfig",
]
