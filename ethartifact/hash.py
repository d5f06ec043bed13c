"""Keccak256 hash utilities."""

from __future__ import annotations

from Crypto.Hash import keccak


def keccak256(data: bytes | bytearray | memoryview | str) -> bytes:
    """Return the 32-byte Keccak256 hash of ``data``; text is hashed as UTF-8."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def function_selector(signature: str) -> bytes:
    """Return the 4-byte selector of a function signature, as the ABI defines it."""
    return keccak256(signature)[:4]