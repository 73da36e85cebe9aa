"""Blockchain infrastructure package."""

from .web3_deployer import Web3ContractDeployer, load_account

__all__ = ["Web3ContractDeployer", "load_account"]
