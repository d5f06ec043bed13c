"""A collection of compiled contracts loaded from one origin."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .contract import Contract


@dataclass(frozen=True)
class InsertResult:
    """Outcome of inserting a contract into an artifact."""

    inserted_contract: Contract
    old_contract: Contract | None = None


class Artifact:
    """Compiled contracts keyed by name, with a human-readable origin.

    Contracts returned by the artifact may be modified in place, but must
    not be renamed; remove and insert them again instead.
    """

    def __init__(self, origin: str = "<unknown>") -> None:
        self.origin = origin
        self._contracts: dict[str, Contract] = {}

    def __len__(self) -> int:
        return len(self._contracts)

    def __contains__(self, name: object) -> bool:
        return name in self._contracts

    def __iter__(self) -> Iterator[Contract]:
        return iter(list(self._contracts.values()))

    def __repr__(self) -> str:
        return f"Artifact(origin={self.origin!r}, contracts={sorted(self._contracts)!r})"

    def is_empty(self) -> bool:
        """Return True if the artifact holds no contracts."""
        return not self._contracts

    def get(self, name: str) -> Contract | None:
        """Return the contract with this name, or None."""
        return self._contracts.get(name)

    def insert(self, contract: Contract) -> InsertResult:
        """Add a contract, replacing and returning any contract of the same name."""
        old = self._contracts.get(contract.name)
        self._contracts[contract.name] = contract
        return InsertResult(inserted_contract=contract, old_contract=old)

    def remove(self, name: str) -> Contract | None:
        """Remove and return the contract with this name, or None."""
        return self._contracts.pop(name, None)

    def drain(self) -> Iterator[Contract]:
        """Take every contract out of the artifact, leaving it empty."""
        taken = list(self._contracts.values())
        self._contracts.clear()
        return iter(taken)