"""
Per-network addresses of the deployed Metrom package.

Each registry instance is a snapshot taken when the package was deployed and is
never edited afterwards: a new deployment gets a new instance in ``REGISTRIES``
so consumers already pinned to an older one keep resolving the same records.
"""
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Type, Union

from .errors import RegistryDefinitionError, UnsupportedChainError

HEX_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


class Provenance(Enum):
    """What the ``created`` number of a record counts."""

    BLOCK = "blockCreated"
    VERSION = "versionCreated"


class AddressFormat(Enum):
    HEX_PREFIXED = "hex_prefixed"
    UNCONSTRAINED = "unconstrained"

    def matches(self, address: str) -> bool:
        if not isinstance(address, str) or not address:
            return False
        if self is AddressFormat.HEX_PREFIXED:
            return HEX_ADDRESS_PATTERN.match(address) is not None
        return True


@dataclass(frozen=True)
class ChainContract:
    address: str
    created: int
    provenance: Provenance = Provenance.BLOCK

    @property
    def block_created(self) -> Optional[int]:
        return self.created if self.provenance is Provenance.BLOCK else None

    @property
    def version_created(self) -> Optional[int]:
        return self.created if self.provenance is Provenance.VERSION else None

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.address, self.provenance.value: self.created}


class ChainRegistry:
    """
    Immutable, exhaustive mapping from a chain enumeration to contract records.

    All checks run in the constructor, so a malformed instance fails when the
    module defining it is imported rather than when a consumer resolves it.
    """

    __slots__ = ("_chain_type", "_entries", "_address_format", "_provenance")

    def __init__(
        self,
        chain_type: Type[Enum],
        entries: Mapping[Enum, ChainContract],
        address_format: AddressFormat = AddressFormat.HEX_PREFIXED,
        provenance: Provenance = Provenance.BLOCK,
    ):
        declared = list(chain_type)
        missing = [chain.value for chain in declared if chain not in entries]
        extra = [repr(key) for key in entries if not isinstance(key, chain_type)]
        if missing:
            raise RegistryDefinitionError(
                f"{chain_type.__name__} registry is missing entries for: {', '.join(missing)}"
            )
        if extra:
            raise RegistryDefinitionError(
                f"{chain_type.__name__} registry has entries for undeclared chains: {', '.join(extra)}"
            )

        for chain, contract in entries.items():
            if contract.provenance is not provenance:
                raise RegistryDefinitionError(
                    f"Entry for {chain.value} records {contract.provenance.value}, "
                    f"but the registry declares {provenance.value}"
                )
            if not address_format.matches(contract.address):
                raise RegistryDefinitionError(
                    f"Entry for {chain.value} has address {contract.address!r}, "
                    f"which is not a valid {address_format.value} address"
                )
            if isinstance(contract.created, bool) or not isinstance(contract.created, int) or contract.created < 0:
                raise RegistryDefinitionError(
                    f"Entry for {chain.value} has invalid {provenance.value}: {contract.created!r}"
                )

        object.__setattr__(self, "_chain_type", chain_type)
        # Keep declaration order regardless of how the entries were written
        object.__setattr__(self, "_entries", MappingProxyType({chain: entries[chain] for chain in declared}))
        object.__setattr__(self, "_address_format", address_format)
        object.__setattr__(self, "_provenance", provenance)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def chain_type(self) -> Type[Enum]:
        return self._chain_type

    @property
    def chains(self) -> Tuple[Enum, ...]:
        return tuple(self._entries)

    @property
    def address_format(self) -> AddressFormat:
        return self._address_format

    @property
    def provenance(self) -> Provenance:
        return self._provenance

    def resolve(self, chain: Union[Enum, str]) -> ChainContract:
        """Return the contract deployed on ``chain`` (a member of the enumeration or its value)."""
        key = self._coerce(chain)
        return self._entries[key]

    def _coerce(self, chain):
        if isinstance(chain, self._chain_type):
            return chain
        if isinstance(chain, str):
            try:
                return self._chain_type(chain)
            except ValueError:
                pass
        raise UnsupportedChainError(chain, [c.value for c in self._entries])

    def items(self):
        return self._entries.items()

    def __iter__(self) -> Iterator[Enum]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, chain) -> bool:
        try:
            self._coerce(chain)
        except UnsupportedChainError:
            return False
        return True

    def __getitem__(self, chain) -> ChainContract:
        return self.resolve(chain)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {chain.value: contract.to_dict() for chain, contract in self._entries.items()}

    def __repr__(self):
        return f"ChainRegistry({self._chain_type.__name__}, chains={[c.value for c in self._entries]})"


# --- DEPLOYMENTS ---

class SupportedChain(Enum):
    DEVNET = "devnet"


ADDRESS = ChainRegistry(
    SupportedChain,
    {
        SupportedChain.DEVNET: ChainContract(
            address="0x280de537562f50a78bba408ac0ea6c9ea8e661222e22734cc8315d8b3341a705",
            created=15406126,
        ),
    },
    address_format=AddressFormat.HEX_PREFIXED,
    provenance=Provenance.BLOCK,
)

# Every authored instance, newest last. Never edit an entry in place.
REGISTRIES: Mapping[str, ChainRegistry] = MappingProxyType({
    "metrom": ADDRESS,
})
