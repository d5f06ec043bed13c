"""Data model of hardhat-deploy export files and network filter entries."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .contract import Contract, parse_address, parse_transaction_hash


class Format(enum.Enum):
    """Layout of a hardhat export file."""

    SINGLE_EXPORT = "single"
    """Contracts for a single network, as written by ``hardhat export``."""

    MULTI_EXPORT = "multi"
    """Contracts for all networks, as written by ``hardhat export --export-all``."""


class _EntryKind(enum.Enum):
    CHAIN_ID = "chain_id"
    NAME = "name"


@dataclass(frozen=True)
class NetworkEntry:
    """A network in an allow or deny list, identified by chain ID or by name."""

    kind: _EntryKind
    value: str

    @classmethod
    def by_chain_id(cls, chain_id: str) -> NetworkEntry:
        """Return an entry that matches networks with this chain ID."""
        return cls(_EntryKind.CHAIN_ID, chain_id)

    @classmethod
    def by_name(cls, name: str) -> NetworkEntry:
        """Return an entry that matches networks with this configured name."""
        return cls(_EntryKind.NAME, name)

    def matches(self, chain_id: str, chain_name: str) -> bool:
        """Return True if this entry names the given network."""
        if self.kind is _EntryKind.CHAIN_ID:
            return chain_id == self.value
        return chain_name == self.value


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _string(data: Mapping[str, Any], key: str, what: str) -> str:
    if key not in data:
        raise ValueError(f"{what} is missing '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"{what} field '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass
class HardHatDeployment:
    """One deployed contract: its address, deployment transaction and contract data."""

    address: bytes
    transaction_hash: bytes | None = None
    contract: Contract = field(default_factory=Contract)

    @classmethod
    def from_json(cls, data: Any) -> HardHatDeployment:
        data = _mapping(data, "deployment")
        if "address" not in data:
            raise ValueError("deployment is missing 'address'")
        tx_hash = data.get("transactionHash")
        return cls(
            address=parse_address(data["address"]),
            transaction_hash=None if tx_hash is None else parse_transaction_hash(tx_hash),
            contract=Contract.from_json(data),
        )


@dataclass
class HardHatExport:
    """All contracts deployed on one network."""

    chain_name: str
    chain_id: str
    contracts: dict[str, HardHatDeployment] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> HardHatExport:
        data = _mapping(data, "export")
        chain_name = _string(data, "name", "export")
        chain_id = _string(data, "chainId", "export")
        if "contracts" not in data:
            raise ValueError("export is missing 'contracts'")
        contracts = _mapping(data["contracts"], "contracts")
        return cls(
            chain_name=chain_name,
            chain_id=chain_id,
            contracts={
                str(name): HardHatDeployment.from_json(value) for name, value in contracts.items()
            },
        )


def parse_multi_export(data: Any) -> dict[str, dict[str, HardHatExport]]:
    """Parse a multi-network export: chain ID to network name to export."""
    data = _mapping(data, "multi-export")
    return {
        str(chain_id): {
            str(name): HardHatExport.from_json(export)
            for name, export in _mapping(networks, "network group").items()
        }
        for chain_id, networks in data.items()
    }