import json

import pytest

from ethartifact.abi import Abi, Event, Function, Param, parse_param_type
from ethartifact.errors import ParseParamTypeError


@pytest.mark.parametrize(
    "text, expected",
    [
        ('{"name":"foo","inputs":[],"outputs":[]}', "foo()"),
        (
            '{"name":"bar","inputs":[{"name":"a","type":"uint256"},{"name":"b","type":"bool"}],"outputs":[]}',
            "bar(uint256,bool)",
        ),
        (
            '{"name":"baz","inputs":[{"name":"a","type":"uint256"}],"outputs":[{"name":"b","type":"bool"}]}',
            "baz(uint256)",
        ),
        (
            '{"name":"bax","inputs":[],"outputs":[{"name":"a","type":"uint256"},{"name":"b","type":"bool"}]}',
            "bax()",
        ),
    ],
)
def test_format_function_signature(text, expected):
    function = Function.from_json(json.loads(text))
    assert function.abi_signature() == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ('{"name":"foo","inputs":[],"anonymous":false}', "foo()"),
        (
            '{"name":"bar","inputs":[{"name":"a","type":"uint256"},{"name":"b","type":"bool"}],"anonymous":false}',
            "bar(uint256,bool)",
        ),
        (
            '{"name":"baz","inputs":[{"name":"a","type":"uint256"}],"anonymous":true}',
            "baz(uint256) anonymous",
        ),
        ('{"name":"bax","inputs":[],"anonymous":true}', "bax() anonymous"),
    ],
)
def test_format_event_signature(text, expected):
    event = Event.from_json(json.loads(text))
    assert event.abi_signature() == expected


def test_full_signature_includes_outputs():
    function = Function.from_json(
        json.loads(
            '{"name":"baz","inputs":[{"name":"a","type":"uint256"}],"outputs":[{"name":"b","type":"bool"}]}'
        )
    )
    assert function.signature() == "baz(uint256):(bool)"


def test_function_selector():
    function = Function.from_json(
        {
            "name": "myMethod",
            "inputs": [{"name": "a", "type": "uint256"}, {"name": "b", "type": "string"}],
            "outputs": [],
        }
    )
    assert function.selector() == bytes([0x24, 0xEE, 0x00, 0x97])


@pytest.mark.parametrize(
    "text",
    ["address", "bytes", "bool", "string", "uint8", "int256", "bytes32",
     "uint256[]", "address[3]", "bytes1[2][]", "(uint256,bool)", "(address,(bool,string[]))[]"],
)
def test_param_type_round_trip(text):
    assert str(parse_param_type(text)) == text


def test_bare_int_types_default_to_256_bits():
    assert str(parse_param_type("uint")) == "uint256"
    assert str(parse_param_type("int")) == "int256"


@pytest.mark.parametrize("text", ["foo", "uint7", "uint264", "bytes33", "uint256[x]", "(uint256", ""])
def test_invalid_param_type(text):
    with pytest.raises(ParseParamTypeError) as info:
        parse_param_type(text)
    assert info.value.value == text


def test_tuple_components_in_json():
    param = Param.from_json(
        {
            "name": "t",
            "type": "tuple[]",
            "components": [{"name": "a", "type": "uint256"}, {"name": "b", "type": "bool"}],
        }
    )
    assert str(param.kind) == "(uint256,bool)[]"
    assert Param.from_json(param.to_json()) == param


def test_event_indexed_survives_round_trip():
    event = Event.from_json(
        {"name": "Transfer", "inputs": [{"name": "from", "type": "address", "indexed": True}],
         "anonymous": False}
    )
    assert event.inputs[0].indexed is True
    assert Event.from_json(event.to_json()) == event


ABI_JSON = [
    {"type": "constructor", "inputs": [{"name": "x", "type": "uint256"}]},
    {"constant": False, "inputs": [], "name": "foo", "outputs": [], "payable": False,
     "stateMutability": "nonpayable", "type": "function"},
    {"type": "event", "name": "Done", "inputs": [], "anonymous": False},
    {"type": "error", "name": "Oops", "inputs": [{"name": "code", "type": "uint8"}]},
    {"type": "fallback"},
    {"type": "receive", "stateMutability": "payable"},
]


def test_abi_from_json():
    abi = Abi.from_json(ABI_JSON)
    assert list(abi.functions) == ["foo"]
    assert abi.functions["foo"][0].abi_signature() == "foo()"
    assert abi.events["Done"][0].abi_signature() == "Done()"
    assert str(abi.errors["Oops"][0].inputs[0].kind) == "uint8"
    assert str(abi.constructor.inputs[0].kind) == "uint256"
    assert abi.fallback and abi.receive


def test_abi_round_trip():
    abi = Abi.from_json(ABI_JSON)
    assert Abi.from_json(abi.to_json()) == abi


def test_different_abis_compare_unequal():
    foo = Abi.from_json([{"name": "foo", "inputs": [], "outputs": [], "type": "function"}])
    bar = Abi.from_json([{"name": "bar", "inputs": [], "outputs": [], "type": "function"}])
    assert not foo == bar
    assert Abi() == Abi.from_json([])


def test_missing_type_defaults_to_function():
    abi = Abi.from_json([{"name": "foo", "inputs": []}])
    assert abi.functions["foo"][0].state_mutability == "nonpayable"


def test_unknown_entry_type_is_rejected():
    with pytest.raises(ValueError):
        Abi.from_json([{"type": "bogus", "name": "x"}])