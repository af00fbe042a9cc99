import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

import structlog
from eth_utils import is_address, to_checksum_address
from web3 import Web3
from web3.contract import Contract

from rifa_service.constants import KNOWN_CONTRACTS
from rifa_service.exceptions import (
    ArtifactMissing,
    BindingNotFound,
    ConfigurationError,
    InvalidInput,
)

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ContractBinding:
    """A logical contract name tied to its ABI and, if known, a deployed address."""

    logical_name: str
    address: Optional[str]
    abi: Tuple[dict, ...]
    bytecode: Optional[str] = None

    def at(self, address: str) -> "ContractBinding":
        """Return a copy of this binding pointing at `address`."""
        if not is_address(address):
            raise InvalidInput(f"{address!r} is not a valid {self.logical_name} address")
        return ContractBinding(
            self.logical_name, to_checksum_address(address), self.abi, self.bytecode
        )

    def contract(self, web3: Web3) -> Contract:
        """Create the callable :mod:`web3` contract object for this binding.

        Bindings without an address yield a contract factory, usable for deployments.
        """
        if self.address is None:
            return web3.eth.contract(abi=list(self.abi), bytecode=self.bytecode)
        return web3.eth.contract(address=self.address, abi=list(self.abi))


def artifact_path(artifacts_dir: Path, name: str) -> Path:
    """Path of the Hardhat build artifact of contract `name`."""
    return Path(artifacts_dir).joinpath("contracts", f"{name}.sol", f"{name}.json")


def load_artifact(artifacts_dir: Path, name: str) -> dict:
    path = artifact_path(artifacts_dir, name)
    try:
        artifact = json.loads(path.read_text())
        abi = artifact["abi"]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise ArtifactMissing(name, path) from e
    log.debug("Loaded contract artifact", contract=name, path=str(path), abi_entries=len(abi))
    return artifact


class ContractRegistry(Mapping):
    """Read-only mapping of logical contract names to their :class:`ContractBinding`.

    Populated once at startup, it does not allow assigning new bindings afterwards.
    """

    def __init__(self, bindings: Dict[str, ContractBinding]):
        self.dict = dict(bindings)

    @classmethod
    def from_artifacts(
        cls, artifacts_dir: Path, addresses: Dict[str, Optional[str]]
    ) -> "ContractRegistry":
        """Eagerly load the artifacts of the contracts named in `addresses`.

        `addresses` maps the logical names to load to their deployed addresses;
        contracts deployed per request (raffles) map to `None`.

        :raises ArtifactMissing: if an artifact can not be read.
        :raises ConfigurationError: if a configured address is malformed.
        """
        bindings = {}
        for name, address in addresses.items():
            if name not in KNOWN_CONTRACTS:
                raise BindingNotFound(f"Unknown contract {name!r}")
            artifact = load_artifact(artifacts_dir, name)
            if address is not None:
                if not is_address(address):
                    raise ConfigurationError(f"Invalid address for {name}: {address!r}")
                address = to_checksum_address(address)
            elif not artifact.get("bytecode"):
                # Contracts without a fixed address are deployed by us.
                raise ArtifactMissing(name, artifact_path(artifacts_dir, name))
            bindings[name] = ContractBinding(
                logical_name=name,
                address=address,
                abi=tuple(artifact["abi"]),
                bytecode=artifact.get("bytecode"),
            )
        log.info(
            "Contract registry loaded",
            contracts={name: b.address for name, b in bindings.items()},
        )
        return cls(bindings)

    def __getitem__(self, item: str) -> ContractBinding:
        return self.dict[item]

    def __len__(self):
        return len(self.dict)

    def __iter__(self):
        return iter(self.dict)

    def resolve(self, logical_name: str, address: Optional[str] = None) -> ContractBinding:
        """Return the binding for `logical_name`, optionally placed at `address`.

        :raises BindingNotFound:
            if `logical_name` is unknown, or no `address` was given and none is configured.
        :raises InvalidInput: if `address` is not a valid account identifier.
        """
        try:
            binding = self.dict[logical_name]
        except KeyError:
            raise BindingNotFound(f"No contract artifact registered for {logical_name!r}")

        if address is not None:
            return binding.at(address)
        if binding.address is None:
            raise BindingNotFound(f"No address configured for contract {logical_name!r}")
        return binding
