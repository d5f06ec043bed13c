"""Contract bytecode with solc library link placeholders, and linking."""

from __future__ import annotations

from collections.abc import Iterator

from .errors import (
    InvalidHexDigitError,
    InvalidLengthError,
    LibraryNotFoundError,
    PlaceholderTooShortError,
    UndefinedLibraryError,
)

_PLACEHOLDER_LEN = 40
_MAX_LIBRARY_NAME = 38
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def to_fixed_hex(address: bytes | bytearray | str | int) -> str:
    """Return a 20-byte address as 40 lower-case hex digits without prefix."""
    if isinstance(address, str):
        raw = address[2:] if address[:2] in ("0x", "0X") else address
        try:
            data = bytes.fromhex(raw)
        except ValueError:
            raise ValueError(f"invalid address {address!r}") from None
    elif isinstance(address, int):
        try:
            data = address.to_bytes(20, "big")
        except OverflowError:
            raise ValueError(f"address {address} does not fit in 20 bytes") from None
    else:
        data = bytes(address)
    if len(data) != 20:
        raise ValueError(f"address must be 20 bytes, got {len(data)}")
    return data.hex()


def _code_blocks(code: str) -> Iterator[str]:
    """Yield the hex stretches of ``code`` between link placeholders."""
    while code:
        pos = code.find("__")
        if pos < 0:
            yield code
            return
        tail = code[pos:]
        if len(tail) < _PLACEHOLDER_LEN:
            raise PlaceholderTooShortError()
        yield code[:pos]
        code = tail[_PLACEHOLDER_LEN:]


def _validate(s: str) -> str:
    if not s:
        return ""
    if len(s) % 2:
        raise InvalidLengthError()
    s = s.removeprefix("0x")
    for block in _code_blocks(s):
        for ch in block:
            if ch not in _HEX_DIGITS:
                raise InvalidHexDigitError(ch)
    return s


class Bytecode:
    """Hex bytecode that may still hold placeholders for libraries to link."""

    __slots__ = ("_code",)

    def __init__(self, code: str = "") -> None:
        self._code = _validate(code)

    @classmethod
    def from_hex_str(cls, s: str) -> Bytecode:
        """Read bytecode from a hex string with an optional ``0x`` prefix."""
        return cls(s)

    def link(self, name: str, address: bytes | bytearray | str | int) -> None:
        """Replace every placeholder for library ``name`` with ``address``."""
        if len(name) > _MAX_LIBRARY_NAME:
            raise ValueError("invalid library name for linking")
        placeholder = "__" + name.ljust(_MAX_LIBRARY_NAME, "_")
        hex_address = to_fixed_hex(address)
        if placeholder not in self._code:
            raise LibraryNotFoundError(name)
        self._code = self._code.replace(placeholder, hex_address)

    def to_bytes(self) -> bytes:
        """Return the raw bytes; fails while any library is left unlinked."""
        library = next(self.undefined_libraries(), None)
        if library is not None:
            raise UndefinedLibraryError(library)
        return bytes.fromhex(self._code)

    def undefined_libraries(self) -> Iterator[str]:
        """Yield each library still awaiting linking, once, in order of appearance."""
        seen: set[str] = set()
        code = self._code
        cursor = 0
        while (pos := code.find("__", cursor)) >= 0:
            end = pos + _PLACEHOLDER_LEN
            library = code[pos:end].strip("_")
            cursor = end
            if library not in seen:
                seen.add(library)
                yield library

    def requires_linking(self) -> bool:
        """Return True if the bytecode still holds link placeholders."""
        return next(self.undefined_libraries(), None) is not None

    def is_empty(self) -> bool:
        """Return True if there is no bytecode at all."""
        return not self._code

    def __str__(self) -> str:
        return self._code

    def __repr__(self) -> str:
        return f"Bytecode({self._code!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bytecode):
            return NotImplemented
        return self._code == other._code

    __hash__ = None  # type: ignore[assignment]