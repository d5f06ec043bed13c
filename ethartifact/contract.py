"""Compiled contract data: ABI, bytecode, deployments and documentation."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .abi import Abi
from .bytecode import Bytecode

_U64_MAX = 2**64 - 1
_HEX = re.compile(r"[0-9a-fA-F]*")


def _parse_fixed_hex(value: Any, length: int, what: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        data = bytes(value)
    elif isinstance(value, str):
        if not value.startswith("0x"):
            raise ValueError(f"invalid {what} {value!r}: missing 0x prefix")
        digits = value[2:]
        if len(digits) % 2 or not _HEX.fullmatch(digits):
            raise ValueError(f"invalid {what} {value!r}")
        data = bytes.fromhex(digits)
    else:
        raise ValueError(f"invalid {what}: expected a string, got {type(value).__name__}")
    if len(data) != length:
        raise ValueError(f"invalid {what}: expected {length} bytes, got {len(data)}")
    return data


def parse_address(value: str | bytes | bytearray) -> bytes:
    """Parse a 0x-prefixed hex address into its 20 bytes."""
    return _parse_fixed_hex(value, 20, "address")


def parse_transaction_hash(value: str | bytes | bytearray) -> bytes:
    """Parse a 0x-prefixed hex transaction hash into its 32 bytes."""
    return _parse_fixed_hex(value, 32, "transaction hash")


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _optional_str(value: Any, what: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{what} must be a string or null, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class DeploymentInformation:
    """When a contract instance was deployed: a block number or a transaction hash."""

    block_number: int | None = None
    transaction_hash: bytes | None = None

    def __post_init__(self) -> None:
        if (self.block_number is None) == (self.transaction_hash is None):
            raise ValueError("exactly one of block_number and transaction_hash must be set")
        if self.block_number is not None and not 0 <= self.block_number <= _U64_MAX:
            raise ValueError(f"block number {self.block_number} is out of range")
        if self.transaction_hash is not None and len(self.transaction_hash) != 32:
            raise ValueError("transaction hash must be 32 bytes")

    @classmethod
    def from_json(cls, value: Any) -> DeploymentInformation:
        if isinstance(value, bool):
            raise ValueError("data did not match any variant of DeploymentInformation")
        if isinstance(value, int):
            return cls(block_number=value)
        if isinstance(value, str):
            return cls(transaction_hash=parse_transaction_hash(value))
        raise ValueError("data did not match any variant of DeploymentInformation")

    def to_json(self) -> int | str:
        if self.block_number is not None:
            return self.block_number
        assert self.transaction_hash is not None
        return "0x" + self.transaction_hash.hex()


@dataclass
class Network:
    """Where a contract is deployed on one network."""

    address: bytes
    deployment_information: DeploymentInformation | None = None

    @classmethod
    def from_json(cls, data: Any) -> Network:
        data = _mapping(data, "network")
        if "address" not in data:
            raise ValueError("network is missing 'address'")
        info = data.get("transactionHash")
        return cls(
            address=parse_address(data["address"]),
            deployment_information=None if info is None else DeploymentInformation.from_json(info),
        )

    def to_json(self) -> dict[str, Any]:
        info = self.deployment_information
        return {
            "address": "0x" + self.address.hex(),
            "transactionHash": None if info is None else info.to_json(),
        }


@dataclass
class DocEntry:
    """Documentation of a single contract method."""

    details: str | None = None


def _doc_entry_from_json(data: Any) -> DocEntry:
    data = _mapping(data, "documentation entry")
    return DocEntry(details=_optional_str(data.get("details"), "details"))


@dataclass
class Documentation:
    """Developer or user documentation of a contract."""

    details: str | None = None
    methods: dict[str, DocEntry] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> Documentation:
        data = _mapping(data, "documentation")
        if "methods" not in data:
            raise ValueError("documentation is missing 'methods'")
        methods = _mapping(data["methods"], "documentation methods")
        return cls(
            details=_optional_str(data.get("details"), "details"),
            methods={str(k): _doc_entry_from_json(v) for k, v in methods.items()},
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "details": self.details,
            "methods": {k: {"details": v.details} for k, v in self.methods.items()},
        }


@dataclass
class Contract:
    """A compiled contract. Unnamed contracts have an empty name."""

    name: str = ""
    abi: Abi = field(default_factory=Abi)
    bytecode: Bytecode = field(default_factory=Bytecode)
    networks: dict[str, Network] = field(default_factory=dict)
    devdoc: Documentation = field(default_factory=Documentation)
    userdoc: Documentation = field(default_factory=Documentation)

    @classmethod
    def empty(cls) -> Contract:
        """Return an unnamed contract with no ABI, bytecode or deployments."""
        return cls()

    @classmethod
    def with_name(cls, name: str) -> Contract:
        """Return an empty contract with the given name."""
        return cls(name=name)

    @classmethod
    def from_json(cls, data: Any) -> Contract:
        """Build a contract from artifact JSON; missing fields take empty defaults."""
        data = _mapping(data, "contract")
        contract = cls()
        if "contractName" in data:
            name = data["contractName"]
            if not isinstance(name, str):
                raise ValueError("contractName must be a string")
            contract.name = name
        if "abi" in data:
            abi = data["abi"]
            if not isinstance(abi, list):
                raise ValueError("abi must be a list")
            contract.abi = Abi.from_json(abi)
        if "bytecode" in data:
            code = data["bytecode"]
            if not isinstance(code, str):
                raise ValueError("bytecode must be a string")
            contract.bytecode = Bytecode.from_hex_str(code)
        if "networks" in data:
            networks = _mapping(data["networks"], "networks")
            contract.networks = {str(k): Network.from_json(v) for k, v in networks.items()}
        if "devdoc" in data:
            contract.devdoc = Documentation.from_json(data["devdoc"])
        if "userdoc" in data:
            contract.userdoc = Documentation.from_json(data["userdoc"])
        return contract

    def to_json(self) -> dict[str, Any]:
        return {
            "contractName": self.name,
            "abi": self.abi.to_json(),
            "bytecode": str(self.bytecode),
            "networks": {k: v.to_json() for k, v in self.networks.items()},
            "devdoc": self.devdoc.to_json(),
            "userdoc": self.userdoc.to_json(),
        }