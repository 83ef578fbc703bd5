import json
import os
from dataclasses import dataclass
from typing import List

from ..errors import PayloadError


@dataclass(frozen=True)
class PublishPayload:
    """
    Output of ``aptos move build-publish-payload``.

    The file holds the arguments of ``0x1::code::publish_package_txn``:
    args[0] is the package metadata, args[1] the list of module bytecodes,
    both hex encoded.
    """

    metadata_hex: str
    modules_hex: List[str]

    @property
    def metadata(self) -> bytes:
        return _hex_to_bytes(self.metadata_hex)

    @property
    def modules(self) -> List[bytes]:
        return [_hex_to_bytes(module) for module in self.modules_hex]


def _hex_to_bytes(value: str) -> bytes:
    return bytes.fromhex(value[2:] if value.startswith("0x") else value)


def normalize_hex(value: str) -> str:
    value = value.lower()
    return value if value.startswith("0x") else "0x" + value


def load_publish_payload(path: str) -> PublishPayload:
    if not os.path.exists(path):
        raise PayloadError(f"publish payload not found at {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise PayloadError(f"could not read publish payload {path}: {e}") from e

    try:
        args = data["args"]
        metadata = args[0]["value"]
        modules = args[1]["value"]
    except (KeyError, IndexError, TypeError) as e:
        raise PayloadError(f"publish payload {path} is missing argument {e}") from e

    if isinstance(modules, str):
        modules = [modules]
    if not isinstance(metadata, str) or not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
        raise PayloadError(f"publish payload {path} does not hold hex encoded arguments")

    for value in [metadata, *modules]:
        try:
            _hex_to_bytes(value)
        except ValueError as e:
            raise PayloadError(f"publish payload {path} holds invalid hex: {e}") from e

    return PublishPayload(metadata_hex=metadata, modules_hex=list(modules))
