"""Unit tests for the standard-JSON compiler adapter."""

import pytest

from duna_service.domain.exceptions import CompilationError
from duna_service.infrastructure.compiler import (
    SOURCE_FILE_NAME,
    StandardJsonCompiler,
    build_standard_input,
    select_first_contract,
)


# ── Helpers ──


def _diagnostic(severity: str, message: str) -> dict:
    return {
        "severity": severity,
        "type": "ParserError" if severity == "error" else "Warning",
        "message": message,
        "formattedMessage": f"{severity.capitalize()}: {message}",
    }


def _artifact(bytecode: str = "6080", abi: list | None = None) -> dict:
    return {"abi": abi or [], "evm": {"bytecode": {"object": bytecode}}}


def _output(contracts: dict | None = None, errors: list | None = None) -> dict:
    output: dict = {"sources": {SOURCE_FILE_NAME: {"id": 0}}}
    if contracts is not None:
        output["contracts"] = {SOURCE_FILE_NAME: contracts}
    if errors is not None:
        output["errors"] = errors
    return output


class RecordingBackend:
    """Fake compiler backend returning a canned standard-JSON output."""

    def __init__(self, output: dict):
        self._output = output
        self.inputs: list[dict] = []

    async def __call__(self, input_data: dict) -> dict:
        self.inputs.append(input_data)
        return self._output


# ── Tests ──


def test_standard_input_requests_only_abi_and_bytecode():
    data = build_standard_input("contract A {}")

    assert data["language"] == "Solidity"
    assert data["sources"] == {SOURCE_FILE_NAME: {"content": "contract A {}"}}
    assert data["settings"]["outputSelection"] == {"*": {"*": ["abi", "evm.bytecode"]}}


def test_two_errors_and_a_warning_report_exactly_the_errors():
    output = _output(
        errors=[
            _diagnostic("error", "Expected ';' but got '}'"),
            _diagnostic("warning", "Unused local variable."),
            _diagnostic("error", "Undeclared identifier."),
        ]
    )

    with pytest.raises(CompilationError) as exc_info:
        select_first_contract(output)

    assert exc_info.value.errors == [
        "Error: Expected ';' but got '}'",
        "Error: Undeclared identifier.",
    ]


def test_warnings_alone_do_not_fail():
    output = _output(
        contracts={"Alpha_Co": _artifact("6080aa")},
        errors=[_diagnostic("warning", "SPDX license identifier not provided.")],
    )

    contract = select_first_contract(output)

    assert contract.name == "Alpha_Co"
    assert contract.bytecode == "6080aa"
    assert contract.warnings == ["Warning: SPDX license identifier not provided."]


def test_zero_contracts_is_a_compilation_failure():
    with pytest.raises(CompilationError) as exc_info:
        select_first_contract(_output(contracts={}))
    assert exc_info.value.errors == ["source defines no contracts"]


def test_missing_contracts_key_is_a_compilation_failure():
    with pytest.raises(CompilationError):
        select_first_contract(_output())


def test_first_contract_in_enumeration_order_wins():
    abi = [{"type": "constructor", "inputs": []}]
    contract = select_first_contract(
        _output(contracts={"Alpha_Co": _artifact("01", abi), "Beta": _artifact("02")})
    )

    assert contract.name == "Alpha_Co"
    assert contract.abi == abi


def test_contracts_without_bytecode_are_skipped():
    contract = select_first_contract(
        _output(contracts={"IGovernance": _artifact(""), "Alpha_Co": _artifact("6080")})
    )
    assert contract.name == "Alpha_Co"


def test_only_interfaces_is_a_compilation_failure():
    with pytest.raises(CompilationError) as exc_info:
        select_first_contract(_output(contracts={"IGovernance": _artifact("")}))
    assert "IGovernance" in exc_info.value.errors[0]


def test_unlinked_library_reference_is_a_compilation_failure():
    linked = "6080__$3c4a2b1e9f0d8c7b6a5e4d3c2b1a0f9e8d$__6040"
    with pytest.raises(CompilationError) as exc_info:
        select_first_contract(_output(contracts={"Alpha_Co": _artifact(linked)}))
    assert exc_info.value.errors == ["contract 'Alpha_Co' requires library linking"]


@pytest.mark.asyncio
async def test_compiler_sends_single_in_memory_file_to_backend():
    backend = RecordingBackend(_output(contracts={"Alpha_Co": _artifact("6080")}))
    compiler = StandardJsonCompiler(backend)

    contract = await compiler.compile("contract Alpha_Co {}")

    assert contract.name == "Alpha_Co"
    assert len(backend.inputs) == 1
    assert list(backend.inputs[0]["sources"]) == [SOURCE_FILE_NAME]
    assert backend.inputs[0]["sources"][SOURCE_FILE_NAME]["content"] == "contract Alpha_Co {}"


@pytest.mark.asyncio
async def test_compiler_propagates_compilation_errors():
    backend = RecordingBackend(_output(errors=[_diagnostic("error", "boom")]))
    compiler = StandardJsonCompiler(backend)

    with pytest.raises(CompilationError):
        await compiler.compile("contract {")
