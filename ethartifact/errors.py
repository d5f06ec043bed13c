"""Exception types raised while loading artifacts, parsing bytecode and linking."""

from __future__ import annotations


class ArtifactError(Exception):
    """An error in loading or parsing an artifact."""


class AbiMismatchError(ArtifactError):
    """A contract was deployed onto different chains with different ABIs."""

    def __init__(self, name: str) -> None:
        super().__init__(f"contract {name} has different ABIs on different chains")
        self.name = name


class DuplicateChainError(ArtifactError):
    """A contract has several deployment addresses on the same chain."""

    def __init__(self, chain_id: str) -> None:
        super().__init__(f"chain with id {chain_id} appears several times in the artifact")
        self.chain_id = chain_id


class BytecodeError(ValueError):
    """An error reading the hex string representation of bytecode."""


class InvalidLengthError(BytecodeError):
    """The bytecode string does not have an even length."""

    def __init__(self) -> None:
        super().__init__("invalid bytecode length")


class PlaceholderTooShortError(BytecodeError):
    """A link placeholder at the end of the bytecode string is cut short."""

    def __init__(self) -> None:
        super().__init__("placeholder at end of bytecode is too short")


class InvalidHexDigitError(BytecodeError):
    """The bytecode string holds a character that is not a hex digit."""

    def __init__(self, digit: str) -> None:
        super().__init__(f"invalid hex digit '{digit}'")
        self.digit = digit


class LinkError(Exception):
    """An error linking a library into bytecode."""


class LibraryNotFoundError(LinkError):
    """The placeholder for the library to link cannot be found."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unable to link library: can't find link placeholder for {name}")
        self.name = name


class UndefinedLibraryError(LinkError):
    """Bytecode still holds placeholders for libraries that were not linked."""

    def __init__(self, name: str) -> None:
        super().__init__(f"undefined library {name}")
        self.name = name


class ParseParamTypeError(ValueError):
    """A string is not a valid Solidity parameter type."""

    def __init__(self, value: str) -> None:
        super().__init__(f"'{value}' is not a valid Solidity type")
        self.value = value