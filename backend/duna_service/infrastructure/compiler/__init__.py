"""Solidity compiler infrastructure package."""

from .solc_compiler import (
    SOURCE_FILE_NAME,
    SolcxBackend,
    StandardJsonCompiler,
    build_standard_input,
    select_first_contract,
)

__all__ = [
    "SOURCE_FILE_NAME",
    "SolcxBackend",
    "StandardJsonCompiler",
    "build_standard_input",
    "select_first_contract",
]
