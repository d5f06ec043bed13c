import io
import json

import pytest

from ethartifact.contract import Contract
from ethartifact.errors import ArtifactError
from ethartifact.truffle import TruffleLoader

ARTIFACT = json.dumps(
    {
        "contractName": "Token",
        "abi": [
            {
                "type": "function",
                "name": "foo",
                "inputs": [],
                "outputs": [],
                "stateMutability": "nonpayable",
            }
        ],
        "bytecode": "0x6060",
        "networks": {"4": {"address": "0x000000000000000000000000000000000000000A"}},
    }
)


def test_load_from_str():
    artifact = TruffleLoader().load_from_str(ARTIFACT)
    assert artifact.origin == "<unknown>"
    assert len(artifact) == 1
    contract = artifact.get("Token")
    assert list(contract.abi.functions) == ["foo"]
    assert contract.networks["4"].address == bytes(19) + b"\x0a"


def test_load_unnamed_contract():
    artifact = TruffleLoader().load_from_value({"abi": []})
    assert "" in artifact


def test_name_override():
    loader = TruffleLoader().with_name("Other")
    artifact = loader.load_from_str(ARTIFACT)
    assert "Other" in artifact
    assert "Token" not in artifact
    assert loader.load_contract_from_str(ARTIFACT).name == "Other"


def test_origin_override():
    assert TruffleLoader.with_origin("here").load_from_str(ARTIFACT).origin == "here"
    loader = TruffleLoader().with_artifact_origin("there")
    assert loader.load_from_bytes(ARTIFACT.encode()).origin == "there"


def test_builders_do_not_mutate():
    base = TruffleLoader()
    base.with_name("X")
    assert base.name is None


def test_load_from_reader_text_and_bytes():
    text = TruffleLoader().load_from_reader(io.StringIO(ARTIFACT))
    raw = TruffleLoader().load_from_reader(io.BytesIO(ARTIFACT.encode()))
    assert text.get("Token") == raw.get("Token")


def test_load_from_file_sets_origin(tmp_path):
    path = tmp_path / "Token.json"
    path.write_text(ARTIFACT)
    artifact = TruffleLoader().load_from_file(path)
    assert artifact.origin == str(path)
    assert "Token" in artifact
    assert TruffleLoader().load_contract_from_file(path).name == "Token"


def test_missing_file(tmp_path):
    with pytest.raises(ArtifactError):
        TruffleLoader().load_from_file(tmp_path / "missing.json")


def test_invalid_json():
    with pytest.raises(ArtifactError):
        TruffleLoader().load_from_str("{not json")


def test_invalid_contract():
    with pytest.raises(ArtifactError):
        TruffleLoader().load_contract_from_value({"bytecode": "0x1"})
    with pytest.raises(ArtifactError):
        TruffleLoader().load_contract_from_value([1, 2])


def test_save_roundtrip():
    contract = TruffleLoader().load_contract_from_str(ARTIFACT)
    text = TruffleLoader.save_to_string(contract)
    assert TruffleLoader().load_contract_from_str(text) == contract


def test_save_empty_contract():
    text = TruffleLoader.save_to_string(Contract.empty())
    assert json.loads(text)["contractName"] == ""
    assert TruffleLoader().load_contract_from_str(text) == Contract.empty()