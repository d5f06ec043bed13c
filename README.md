# ethartifact

Load, inspect and link compiled Ethereum smart-contract artifacts.

`ethartifact` reads the JSON artifacts produced by Truffle, Waffle and
hardhat-deploy into plain Python objects. It gives you contract ABIs,
bytecode with library linking, deployment addresses per chain, and
Keccak-256 based function selectors.

## Installation

```
pip install ethartifact
```

Install with `pip install "ethartifact[test]"` to get the test
dependencies as well.

## Loading a Truffle artifact

A Truffle artifact holds one contract:

```python
from ethartifact.truffle import TruffleLoader

contract = TruffleLoader().load_contract_from_file("build/contracts/Token.json")
print(contract.name)
for chain_id, network in contract.networks.items():
    print(chain_id, network.address.hex())
```

To get an `Artifact` instead of a bare contract, call `load_from_file`.
The loaders also accept strings (`load_from_str`), bytes
(`load_from_bytes`), parsed JSON (`load_from_value`) and open files
(`load_from_reader`), with matching `load_contract_from_*` methods.
`with_name` returns a loader that renames loaded contracts and
`with_artifact_origin` one that overrides the artifact's origin.
`TruffleLoader.save_to_string(contract)` writes a contract back out as
compact JSON.

## Loading hardhat-deploy exports

```python
from ethartifact.hardhat import HardHatLoader
from ethartifact.hardhat_export import Format

artifact = (
    HardHatLoader()
    .allow_network_by_name("mainnet")
    .deny_contract("Migrations")
    .load_from_file(Format.MULTI_EXPORT, "deployments.json")
)

for contract in artifact:
    print(contract.name, sorted(contract.networks))
```

Use `Format.SINGLE_EXPORT` for the output of `hardhat export`, and
`Format.MULTI_EXPORT` for `hardhat export --export-all`. A
`deployments` directory (one sub-directory per network, each with a
`.chainId` file and one JSON file per contract) can be read with
`load_from_directory`.

Networks can be allowed or denied by name or by chain id, and contracts
by name. The loader is immutable: each `allow_*` and `deny_*` call
returns a new loader. A deny list takes precedence over an allow list,
and an empty allow list allows everything. If one contract has different
ABIs on different chains, loading raises `AbiMismatchError`. If one
chain appears twice for a contract, it raises `DuplicateChainError`.

## Working with an artifact

```python
from ethartifact.artifact import Artifact
from ethartifact.contract import Contract

artifact = Artifact()
result = artifact.insert(Contract.with_name("C1"))
assert result.old_contract is None
assert "C1" in artifact and len(artifact) == 1
removed = artifact.remove("C1")
```

`get` looks a contract up by name, `drain` takes every contract out,
and `origin` says where the artifact came from (`"<unknown>"` by
default).

## Bytecode and linking

```python
from ethartifact.bytecode import Bytecode

code = Bytecode.from_hex_str("0x61" + "__MyLib" + "_" * 33)
print(list(code.undefined_libraries()))   # ['MyLib']
code.link("MyLib", "0x0000000000000000000000000000000000000001")
raw = code.to_bytes()
```

`to_bytes` raises `UndefinedLibraryError` while placeholders remain.
`link` raises `LibraryNotFoundError` for an unknown library, and
`ValueError` for a library name longer than 38 characters.

## ABI helpers

```python
from ethartifact.abi import Function, parse_param_type
from ethartifact.hash import function_selector, keccak256

fn = Function.from_json({"name": "bar", "inputs": [
    {"name": "a", "type": "uint256"}, {"name": "b", "type": "bool"}],
    "outputs": []})
print(fn.abi_signature())                 # bar(uint256,bool)
print(fn.selector().hex())
print(function_selector("Error(string)").hex())  # 08c379a0
print(parse_param_type("uint256[]"))      # uint256[]
```

`Event.abi_signature()` gives the human-readable event signature, with
` anonymous` appended for anonymous events.

## Errors

The package's own exceptions live in `ethartifact.errors`: loading
errors derive from `ArtifactError`, bytecode parsing errors from
`BytecodeError`, linking errors from `LinkError`, and an invalid
Solidity type raises `ParseParamTypeError`.

## What it does not do

This package only reads, inspects and links artifacts. It does not
encode or decode call data, talk to an Ethereum node, or deploy and
call contracts.