"""Loader for artifacts written by the hardhat-deploy plugin.

Three layouts are supported: a single-network export (``hardhat export``),
a multi-network export (``hardhat export --export-all``) and the
``deployments`` directory with one sub-directory per network.

A contract must have the same ABI on every network it is loaded from, and
each chain ID may appear only once per contract. Use the network and contract
allow and deny lists to filter out conflicting entries.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import IO, Any

from .artifact import Artifact
from .contract import Contract, DeploymentInformation, Network
from .errors import AbiMismatchError, ArtifactError, DuplicateChainError
from .hardhat_export import (
    Format,
    HardHatDeployment,
    HardHatExport,
    NetworkEntry,
    parse_multi_export,
)

_UNKNOWN_ORIGIN = "<unknown>"
_PARSE_ERRORS = (ValueError, TypeError, KeyError)


def _parse_json(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise ArtifactError(f"failed to parse contract artifact JSON: {exc}") from exc


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ArtifactError(f"failed to open contract artifact file: {exc}") from exc


def _list_dir(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir())
    except OSError as exc:
        raise ArtifactError(f"failed to open contract artifact file: {exc}") from exc


@dataclass(frozen=True)
class HardHatLoader:
    """Loads hardhat-deploy artifacts, filtering networks and contracts.

    Empty allow lists allow everything; deny lists take precedence over
    allow lists.
    """

    origin: str | None = None
    networks_allow_list: tuple[NetworkEntry, ...] = ()
    networks_deny_list: tuple[NetworkEntry, ...] = ()
    contracts_allow_list: tuple[str, ...] = ()
    contracts_deny_list: tuple[str, ...] = ()

    @classmethod
    def with_origin(cls, origin: str) -> HardHatLoader:
        """Return a loader that sets this origin on loaded artifacts."""
        return cls(origin=origin)

    def with_artifact_origin(self, origin: str) -> HardHatLoader:
        """Return a copy that sets this origin on loaded artifacts."""
        return replace(self, origin=origin)

    def allow_network_by_chain_id(self, network: str) -> HardHatLoader:
        """Return a copy that also allows networks with this chain ID."""
        return replace(
            self, networks_allow_list=(*self.networks_allow_list, NetworkEntry.by_chain_id(network))
        )

    def allow_network_by_name(self, network: str) -> HardHatLoader:
        """Return a copy that also allows networks with this name."""
        return replace(
            self, networks_allow_list=(*self.networks_allow_list, NetworkEntry.by_name(network))
        )

    def deny_network_by_chain_id(self, network: str) -> HardHatLoader:
        """Return a copy that also denies networks with this chain ID."""
        return replace(
            self, networks_deny_list=(*self.networks_deny_list, NetworkEntry.by_chain_id(network))
        )

    def deny_network_by_name(self, network: str) -> HardHatLoader:
        """Return a copy that also denies networks with this name."""
        return replace(
            self, networks_deny_list=(*self.networks_deny_list, NetworkEntry.by_name(network))
        )

    def allow_contract(self, contract: str) -> HardHatLoader:
        """Return a copy that also allows contracts with this name."""
        return replace(self, contracts_allow_list=(*self.contracts_allow_list, contract))

    def deny_contract(self, contract: str) -> HardHatLoader:
        """Return a copy that also denies contracts with this name."""
        return replace(self, contracts_deny_list=(*self.contracts_deny_list, contract))

    def load_from_reader(self, fmt: Format, reader: IO[Any]) -> Artifact:
        """Load an artifact from a file-like object holding JSON text."""
        return self._load(fmt, _UNKNOWN_ORIGIN, _parse_json(reader.read()))

    def load_from_bytes(self, fmt: Format, data: bytes) -> Artifact:
        """Load an artifact from bytes of JSON text."""
        return self._load(fmt, _UNKNOWN_ORIGIN, _parse_json(data))

    def load_from_str(self, fmt: Format, text: str) -> Artifact:
        """Load an artifact from a string of JSON text."""
        return self._load(fmt, _UNKNOWN_ORIGIN, _parse_json(text))

    def load_from_value(self, fmt: Format, value: Any) -> Artifact:
        """Load an artifact from already decoded JSON."""
        return self._load(fmt, _UNKNOWN_ORIGIN, value)

    def load_from_file(self, fmt: Format, path: str | os.PathLike[str]) -> Artifact:
        """Load an artifact from a JSON file on disk."""
        file_path = Path(path)
        return self._load(fmt, str(file_path), _parse_json(_read_bytes(file_path)))

    def load_from_directory(self, path: str | os.PathLike[str]) -> Artifact:
        """Load an artifact from a hardhat ``deployments`` directory.

        Each network has its own sub-directory holding a ``.chainId`` file
        and one JSON file per deployed contract.
        """
        root = Path(path)
        artifact = Artifact(str(root))
        for chain_path in _list_dir(root):
            if not chain_path.is_dir():
                continue
            chain_id_file = chain_path / ".chainId"
            if not chain_id_file.exists():
                continue
            try:
                chain_id = chain_id_file.read_text().strip()
            except (OSError, UnicodeDecodeError) as exc:
                raise ArtifactError(f"failed to open contract artifact file: {exc}") from exc
            if not self._network_allowed(chain_id, chain_path.name):
                continue
            for contract_path in _list_dir(chain_path):
                if not contract_path.is_file() or not contract_path.name.endswith(".json"):
                    continue
                contract_name = contract_path.name[: -len(".json")]
                if not self._contract_allowed(contract_name):
                    continue
                deployment = self._parse(
                    HardHatDeployment.from_json, _parse_json(_read_bytes(contract_path))
                )
                deployment.contract.name = contract_name
                self._add_contract(artifact, deployment, chain_id)
        return artifact

    def _load(self, fmt: Format, origin: str, value: Any) -> Artifact:
        artifact = Artifact(self.origin if self.origin is not None else origin)
        if fmt is Format.SINGLE_EXPORT:
            self._fill(artifact, self._parse(HardHatExport.from_json, value))
        elif fmt is Format.MULTI_EXPORT:
            for networks in self._parse(parse_multi_export, value).values():
                for export in networks.values():
                    self._fill(artifact, export)
        else:
            raise ValueError(f"unknown artifact format {fmt!r}")
        return artifact

    @staticmethod
    def _parse(parser: Any, value: Any) -> Any:
        try:
            return parser(value)
        except _PARSE_ERRORS as exc:
            raise ArtifactError(f"failed to parse contract artifact JSON: {exc}") from exc

    def _fill(self, artifact: Artifact, export: HardHatExport) -> None:
        if not self._network_allowed(export.chain_id, export.chain_name):
            return
        for name, deployment in export.contracts.items():
            if not self._contract_allowed(name):
                continue
            deployment.contract.name = name
            self._add_contract(artifact, deployment, export.chain_id)

    @staticmethod
    def _add_contract(artifact: Artifact, deployment: HardHatDeployment, chain_id: str) -> None:
        new: Contract = deployment.contract
        contract = artifact.get(new.name)
        if contract is None:
            contract = artifact.insert(new).inserted_contract
        elif contract.abi != new.abi:
            raise AbiMismatchError(new.name)

        if chain_id in contract.networks:
            raise DuplicateChainError(chain_id)
        info = (
            None
            if deployment.transaction_hash is None
            else DeploymentInformation(transaction_hash=deployment.transaction_hash)
        )
        contract.networks[chain_id] = Network(
            address=deployment.address, deployment_information=info
        )

    def _contract_allowed(self, name: str) -> bool:
        if name in self.contracts_deny_list:
            return False
        return not self.contracts_allow_list or name in self.contracts_allow_list

    def _network_allowed(self, chain_id: str, chain_name: str) -> bool:
        if any(e.matches(chain_id, chain_name) for e in self.networks_deny_list):
            return False
        return not self.networks_allow_list or any(
            e.matches(chain_id, chain_name) for e in self.networks_allow_list
        )