"""Load, inspect and link compiled Ethereum contract artifacts from Truffle and hardhat-deploy."""

__version__ = "0.1.0"