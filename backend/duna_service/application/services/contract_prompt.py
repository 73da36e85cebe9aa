"""Prompt construction for DUNA contract generation.

Pure functions only: the same record always yields the same prompt.
"""

import re

from duna_service.domain.entities import DunaRecord, render_parameter_value

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9]")

_CONTRACT_PROMPT_TEMPLATE = """\
You are a senior Solidity engineer writing contracts for Decentralized
Unincorporated Nonprofit Associations (DUNAs).

Write a single, self-contained Solidity smart contract for the organisation
described below.

## Organisation

Name: {name}
Description: {description}
Membership status: {membership_status}
Compliance level: {compliance_level}

## Parameters

{parameters}

## Requirements

1. Name the contract exactly `{contract_name}`.
2. Start the file with `// SPDX-License-Identifier: MIT` and
   `pragma solidity ^0.8.20;`.
3. Store the membership status and compliance level as state variables
   initialised to the values above, and expose public getters for them.
4. Restrict state-changing functions to the deploying account (owner).
5. Emit an event whenever the membership status or compliance level changes.
6. The constructor must take no arguments.
7. Do not import external files or libraries.

Respond ONLY with the Solidity source code. No markdown fences, no explanation.
"""


def contract_name_for(record_name: str) -> str:
    """Derive a Solidity identifier from a record name.

    Every non-alphanumeric character becomes an underscore ("Alpha Co" →
    "Alpha_Co"). Names that would start with a digit or are empty get a
    ``Duna_`` prefix so the result is a valid identifier.
    """
    identifier = _NON_IDENTIFIER.sub("_", record_name.strip())
    if not identifier or identifier[0].isdigit():
        identifier = f"Duna_{identifier}"
    return identifier


def _render_parameters(record: DunaRecord) -> str:
    if not record.parameters:
        return "(none)"
    return "\n".join(
        f"- {key}: {render_parameter_value(record.parameters[key])}"
        for key in sorted(record.parameters)
    )


def build_contract_prompt(record: DunaRecord) -> str:
    """Render a record into the code-generation prompt."""
    return _CONTRACT_PROMPT_TEMPLATE.format(
        name=record.name,
        description=record.description or "(none)",
        membership_status=record.membership_status,
        compliance_level=record.compliance_level,
        parameters=_render_parameters(record),
        contract_name=contract_name_for(record.name),
    )
