"""Loader for Truffle and Waffle style single-contract JSON artifacts."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import IO, Any

from .artifact import Artifact
from .contract import Contract
from .errors import ArtifactError


def _parse_json(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise ArtifactError(f"failed to parse contract artifact JSON: {exc}") from exc


def _read_file(path: str | os.PathLike[str]) -> bytes:
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise ArtifactError(f"failed to open contract artifact file: {exc}") from exc


@dataclass(frozen=True)
class TruffleLoader:
    """Loads artifacts holding a single, possibly unnamed, contract.

    ``origin`` overrides the origin of loaded artifacts and ``name`` the name
    of loaded contracts.
    """

    origin: str | None = None
    name: str | None = None

    @classmethod
    def with_origin(cls, origin: str) -> TruffleLoader:
        """Return a loader that sets this origin on loaded artifacts."""
        return cls(origin=origin)

    def with_name(self, name: str) -> TruffleLoader:
        """Return a copy that renames loaded contracts."""
        return replace(self, name=name)

    def with_artifact_origin(self, origin: str) -> TruffleLoader:
        """Return a copy that sets this origin on loaded artifacts."""
        return replace(self, origin=origin)

    def load_from_reader(self, reader: IO[Any]) -> Artifact:
        return self._artifact("<unknown>", self.load_contract_from_reader(reader))

    def load_from_bytes(self, data: bytes) -> Artifact:
        return self._artifact("<unknown>", self.load_contract_from_bytes(data))

    def load_from_str(self, text: str) -> Artifact:
        return self._artifact("<unknown>", self.load_contract_from_str(text))

    def load_from_value(self, value: Any) -> Artifact:
        return self._artifact("<unknown>", self.load_contract_from_value(value))

    def load_from_file(self, path: str | os.PathLike[str]) -> Artifact:
        contract = self.load_contract_from_file(path)
        return self._artifact(str(Path(path)), contract)

    def load_contract_from_reader(self, reader: IO[Any]) -> Contract:
        return self.load_contract_from_value(_parse_json(reader.read()))

    def load_contract_from_bytes(self, data: bytes) -> Contract:
        return self.load_contract_from_value(_parse_json(data))

    def load_contract_from_str(self, text: str) -> Contract:
        return self.load_contract_from_value(_parse_json(text))

    def load_contract_from_value(self, value: Any) -> Contract:
        try:
            contract = Contract.from_json(value)
        except (ValueError, TypeError, KeyError) as exc:
            raise ArtifactError(f"failed to parse contract artifact JSON: {exc}") from exc
        if self.name is not None:
            contract.name = self.name
        return contract

    def load_contract_from_file(self, path: str | os.PathLike[str]) -> Contract:
        return self.load_contract_from_value(_parse_json(_read_file(path)))

    @staticmethod
    def save_to_string(contract: Contract) -> str:
        """Serialize a single contract to compact JSON text."""
        return json.dumps(contract.to_json(), separators=(",", ":"))

    def _artifact(self, origin: str, contract: Contract) -> Artifact:
        artifact = Artifact(self.origin if self.origin is not None else origin)
        artifact.insert(contract)
        return artifact