"""Solidity compiler adapter — implements the SolidityCompiler interface.

Compilation goes through solc's standard-JSON interface with a single
in-memory source file. The raw compiler output comes from a pluggable
backend; the default one runs the solc binary managed by py-solc-x.
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from solcx.install import get_executable, install_solc
from solcx.exceptions import SolcError, SolcInstallationError, SolcNotInstalled
from solcx.wrapper import solc_wrapper

from duna_service.application.interfaces.solidity_compiler import SolidityCompiler
from duna_service.domain.entities import CompiledContract
from duna_service.domain.exceptions import CompilationError

logger = logging.getLogger(__name__)

SOURCE_FILE_NAME = "contract.sol"
# Unlinked library references appear in solc bytecode as __$<hash>$__.
LINK_PLACEHOLDER = "__$"

# Takes a standard-JSON input document, returns the parsed standard-JSON output.
CompilerBackend = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


def build_standard_input(source: str) -> dict[str, Any]:
    """Standard-JSON input requesting only the ABI and EVM bytecode."""
    return {
        "language": "Solidity",
        "sources": {SOURCE_FILE_NAME: {"content": source}},
        "settings": {
            "outputSelection": {
                "*": {"*": ["abi", "evm.bytecode"]},
            },
        },
    }


def _diagnostic_message(entry: dict[str, Any]) -> str:
    return (entry.get("formattedMessage") or entry.get("message") or "").strip()


def select_first_contract(output: dict[str, Any]) -> CompiledContract:
    """Pick the first deployable contract from standard-JSON compiler output.

    Error-severity diagnostics fail the compilation; warnings are kept on the
    result but never fail it. Contracts with empty bytecode (interfaces,
    abstract contracts) are skipped.
    """
    diagnostics = output.get("errors") or []
    errors = [
        _diagnostic_message(entry)
        for entry in diagnostics
        if str(entry.get("severity", "")).lower() == "error"
    ]
    if errors:
        raise CompilationError(errors)

    warnings = [
        _diagnostic_message(entry)
        for entry in diagnostics
        if str(entry.get("severity", "")).lower() != "error"
    ]

    contracts: dict[str, Any] = (output.get("contracts") or {}).get(SOURCE_FILE_NAME) or {}
    if not contracts:
        raise CompilationError(["source defines no contracts"])

    for name, artifact in contracts.items():
        bytecode = ((artifact.get("evm") or {}).get("bytecode") or {}).get("object") or ""
        if bytecode:
            if LINK_PLACEHOLDER in bytecode:
                raise CompilationError([f"contract '{name}' requires library linking"])
            return CompiledContract(
                name=name,
                abi=artifact.get("abi") or [],
                bytecode=bytecode,
                warnings=warnings,
            )

    raise CompilationError(
        [f"no deployable contract among: {', '.join(contracts)}"]
    )


class SolcxBackend:
    """Runs ``solc --standard-json`` through py-solc-x in a worker thread."""

    def __init__(self, solc_version: str, *, auto_install: bool = True):
        self._version = solc_version
        self._auto_install = auto_install

    def _executable(self):
        try:
            return get_executable(self._version)
        except SolcNotInstalled:
            if not self._auto_install:
                raise CompilationError(
                    [f"solc {self._version} is not installed"]
                ) from None
            logger.info("Installing solc %s", self._version)
            try:
                install_solc(self._version)
            except (SolcInstallationError, OSError) as exc:
                raise CompilationError(
                    [f"could not install solc {self._version}: {exc}"]
                ) from exc
            return get_executable(self._version)

    def _run(self, input_data: dict[str, Any]) -> dict[str, Any]:
        binary = self._executable()
        try:
            stdout, _stderr, _command, _proc = solc_wrapper(
                solc_binary=binary,
                stdin=json.dumps(input_data),
                standard_json=True,
            )
        except SolcError as exc:
            raise CompilationError([f"solc failed: {exc.message}"]) from exc
        try:
            return json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise CompilationError(["solc produced unreadable output"]) from exc

    async def __call__(self, input_data: dict[str, Any]) -> dict[str, Any]:
        return await asyncio.to_thread(self._run, input_data)


class StandardJsonCompiler(SolidityCompiler):
    """Compiles one source file and returns its first deployable contract."""

    def __init__(self, backend: CompilerBackend):
        self._backend = backend

    async def compile(self, source: str) -> CompiledContract:
        output = await self._backend(build_standard_input(source))
        contract = select_first_contract(output)
        for warning in contract.warnings:
            logger.debug("solc warning: %s", warning)
        logger.info(
            "Compiled contract '%s' (%d ABI entries, %d warnings)",
            contract.name,
            len(contract.abi),
            len(contract.warnings),
        )
        return contract
