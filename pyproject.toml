[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ethartifact"
version = "0.1.0"
description = "Load, inspect and link compiled Ethereum contract artifacts from Truffle and hardhat-deploy"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["ethereum", "abi", "bytecode", "truffle", "hardhat", "solidity", "artifact"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ethartifact"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
