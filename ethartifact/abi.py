"""Contract ABI model with Solidity parameter types and ABI signatures."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import ParseParamTypeError
from .hash import function_selector

_SIMPLE_TYPES = frozenset({"address", "bytes", "bool", "string"})
_SIZED_TYPE = re.compile(r"(uint|int|bytes)([1-9][0-9]*)")


@dataclass(frozen=True)
class ParamType:
    """A Solidity parameter type.

    ``kind`` is one of ``address``, ``bytes``, ``int``, ``uint``, ``bool``,
    ``string``, ``fixed_bytes``, ``array``, ``fixed_array`` or ``tuple``.
    ``size`` holds the bit width of integers, the length of fixed bytes or the
    length of fixed arrays.
    """

    kind: str
    size: int | None = None
    inner: ParamType | None = None
    components: tuple[ParamType, ...] = ()

    def __str__(self) -> str:
        match self.kind:
            case "int" | "uint":
                return f"{self.kind}{self.size}"
            case "fixed_bytes":
                return f"bytes{self.size}"
            case "array":
                return f"{self.inner}[]"
            case "fixed_array":
                return f"{self.inner}[{self.size}]"
            case "tuple":
                return "(" + ",".join(str(c) for c in self.components) + ")"
            case _:
                return self.kind


def _split_top_level(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in body:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise ValueError("unbalanced parentheses")
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    if depth != 0:
        raise ValueError("unbalanced parentheses")
    parts.append("".join(current))
    return parts


def _parse(s: str) -> ParamType:
    if s.endswith("]"):
        start = s.rfind("[")
        if start <= 0:
            raise ValueError("malformed array type")
        inner = _parse(s[:start])
        dim = s[start + 1 : -1]
        if not dim:
            return ParamType("array", inner=inner)
        if not (dim.isascii() and dim.isdigit()):
            raise ValueError("malformed array length")
        return ParamType("fixed_array", size=int(dim), inner=inner)
    if s.startswith("(") and s.endswith(")"):
        body = s[1:-1]
        if not body:
            return ParamType("tuple")
        return ParamType("tuple", components=tuple(_parse(p) for p in _split_top_level(body)))
    if s in _SIMPLE_TYPES:
        return ParamType(s)
    if s in ("int", "uint"):
        return ParamType(s, size=256)
    if s == "tuple":
        return ParamType("tuple")
    match = _SIZED_TYPE.fullmatch(s)
    if match is None:
        raise ValueError("unknown type")
    base, size = match.group(1), int(match.group(2))
    if base == "bytes":
        if size > 32:
            raise ValueError("fixed bytes too long")
        return ParamType("fixed_bytes", size=size)
    if size > 256 or size % 8:
        raise ValueError("invalid integer width")
    return ParamType(base, size=size)


def parse_param_type(s: str) -> ParamType:
    """Parse a Solidity type such as ``uint256[]`` or ``(address,bool)``."""
    try:
        return _parse(s)
    except ValueError:
        raise ParseParamTypeError(s) from None


def _json_type(kind: ParamType) -> tuple[str, tuple[ParamType, ...] | None]:
    if kind.kind == "tuple":
        return "tuple", kind.components
    if kind.kind in ("array", "fixed_array"):
        assert kind.inner is not None
        base, components = _json_type(kind.inner)
        suffix = "[]" if kind.kind == "array" else f"[{kind.size}]"
        return base + suffix, components
    return str(kind), None


def _type_to_json(name: str, kind: ParamType) -> dict[str, Any]:
    type_str, components = _json_type(kind)
    out: dict[str, Any] = {"name": name, "type": type_str}
    if components is not None:
        out["components"] = [_type_to_json("", c) for c in components]
    return out


def _with_components(kind: ParamType, components: tuple[ParamType, ...]) -> ParamType:
    if kind.kind == "tuple":
        return ParamType("tuple", components=components)
    if kind.kind in ("array", "fixed_array") and kind.inner is not None:
        return dataclasses.replace(kind, inner=_with_components(kind.inner, components))
    return kind


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"ABI entry must be an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"ABI entry is missing '{key}'")
    return data[key]


def _params(items: Iterable[Any]) -> list[Param]:
    return [Param.from_json(item) for item in items]


@dataclass
class Param:
    """A named function, event or error parameter."""

    name: str
    kind: ParamType
    internal_type: str | None = None
    indexed: bool = False

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Param:
        kind = parse_param_type(_require(data, "type"))
        components = data.get("components")
        if components is not None:
            kind = _with_components(kind, tuple(Param.from_json(c).kind for c in components))
        return cls(
            name=data.get("name", ""),
            kind=kind,
            internal_type=data.get("internalType"),
            indexed=bool(data.get("indexed", False)),
        )

    def to_json(self) -> dict[str, Any]:
        out = _type_to_json(self.name, self.kind)
        if self.internal_type is not None:
            out["internalType"] = self.internal_type
        return out


def _default_mutability(data: Mapping[str, Any]) -> str:
    mutability = data.get("stateMutability")
    if mutability is not None:
        return mutability
    if data.get("payable"):
        return "payable"
    if data.get("constant"):
        return "view"
    return "nonpayable"


@dataclass
class Function:
    """A contract function."""

    name: str
    inputs: list[Param] = field(default_factory=list)
    outputs: list[Param] = field(default_factory=list)
    state_mutability: str = "nonpayable"
    constant: bool | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Function:
        return cls(
            name=_require(data, "name"),
            inputs=_params(data.get("inputs", [])),
            outputs=_params(data.get("outputs", [])),
            state_mutability=_default_mutability(data),
            constant=data.get("constant"),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": "function",
            "name": self.name,
            "inputs": [p.to_json() for p in self.inputs],
            "outputs": [p.to_json() for p in self.outputs],
            "stateMutability": self.state_mutability,
        }
        if self.constant is not None:
            out["constant"] = self.constant
        return out

    def signature(self) -> str:
        """Return ``name(inputs)``, followed by ``:(outputs)`` when there are outputs."""
        inputs = ",".join(str(p.kind) for p in self.inputs)
        if not self.outputs:
            return f"{self.name}({inputs})"
        outputs = ",".join(str(p.kind) for p in self.outputs)
        return f"{self.name}({inputs}):({outputs})"

    def abi_signature(self) -> str:
        """Return the method signature in the standard ABI format, without outputs."""
        return self.signature().split(":", 1)[0]

    def selector(self) -> bytes:
        """Return the 4-byte Keccak256 function selector."""
        return function_selector(self.abi_signature())


@dataclass
class Event:
    """A contract event."""

    name: str
    inputs: list[Param] = field(default_factory=list)
    anonymous: bool = False

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Event:
        return cls(
            name=_require(data, "name"),
            inputs=_params(data.get("inputs", [])),
            anonymous=bool(data.get("anonymous", False)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "type": "event",
            "name": self.name,
            "inputs": [{**p.to_json(), "indexed": p.indexed} for p in self.inputs],
            "anonymous": self.anonymous,
        }

    def abi_signature(self) -> str:
        """Return the human-readable event signature whose hash is topic0."""
        inputs = ",".join(str(p.kind) for p in self.inputs)
        suffix = " anonymous" if self.anonymous else ""
        return f"{self.name}({inputs}){suffix}"


@dataclass
class Constructor:
    """A contract constructor."""

    inputs: list[Param] = field(default_factory=list)
    state_mutability: str = "nonpayable"


@dataclass
class AbiError:
    """A custom error declared by a contract."""

    name: str
    inputs: list[Param] = field(default_factory=list)


@dataclass
class Abi:
    """A contract interface: constructor, functions, events and errors."""

    constructor: Constructor | None = None
    functions: dict[str, list[Function]] = field(default_factory=dict)
    events: dict[str, list[Event]] = field(default_factory=dict)
    errors: dict[str, list[AbiError]] = field(default_factory=dict)
    fallback: bool = False
    receive: bool = False

    @classmethod
    def from_json(cls, items: Iterable[Mapping[str, Any]]) -> Abi:
        abi = cls()
        for item in items:
            if not isinstance(item, Mapping):
                raise ValueError(f"ABI entry must be an object, got {type(item).__name__}")
            match item.get("type", "function"):
                case "function":
                    func = Function.from_json(item)
                    abi.functions.setdefault(func.name, []).append(func)
                case "event":
                    event = Event.from_json(item)
                    abi.events.setdefault(event.name, []).append(event)
                case "error":
                    error = AbiError(
                        name=_require(item, "name"), inputs=_params(item.get("inputs", []))
                    )
                    abi.errors.setdefault(error.name, []).append(error)
                case "constructor":
                    abi.constructor = Constructor(
                        inputs=_params(item.get("inputs", [])),
                        state_mutability=_default_mutability(item),
                    )
                case "fallback":
                    abi.fallback = True
                case "receive":
                    abi.receive = True
                case other:
                    raise ValueError(f"unknown ABI entry type {other!r}")
        abi.functions = dict(sorted(abi.functions.items()))
        abi.events = dict(sorted(abi.events.items()))
        abi.errors = dict(sorted(abi.errors.items()))
        return abi

    def to_json(self) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        if self.constructor is not None:
            out.append(
                {
                    "type": "constructor",
                    "inputs": [p.to_json() for p in self.constructor.inputs],
                    "stateMutability": self.constructor.state_mutability,
                }
            )
        for name in sorted(self.functions):
            out.extend(f.to_json() for f in self.functions[name])
        for name in sorted(self.events):
            out.extend(e.to_json() for e in self.events[name])
        for name in sorted(self.errors):
            out.extend(
                {"type": "error", "name": e.name, "inputs": [p.to_json() for p in e.inputs]}
                for e in self.errors[name]
            )
        if self.fallback:
            out.append({"type": "fallback", "stateMutability": "nonpayable"})
        if self.receive:
            out.append({"type": "receive", "stateMutability": "payable"})
        return out