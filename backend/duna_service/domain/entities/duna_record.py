"""Domain entity — pure Python business object for a DUNA organisation record."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union
from uuid import uuid4

# Scalars plus nested string-keyed maps; lists and nulls are not allowed.
ParameterValue = Union[str, int, float, bool, Mapping[str, "ParameterValue"]]


def validate_parameters(parameters: Mapping[str, object], path: str = "") -> dict[str, ParameterValue]:
    """Check that every value in a parameters map is a supported ParameterValue.

    Returns a plain-dict copy. Raises ValueError naming the offending key.
    """
    validated: dict[str, ParameterValue] = {}
    for key, value in parameters.items():
        if not isinstance(key, str):
            raise ValueError(f"parameter key {path}{key!r} must be a string")
        location = f"{path}{key}"
        if isinstance(value, (str, bool, int, float)):
            validated[key] = value
        elif isinstance(value, Mapping):
            validated[key] = validate_parameters(value, path=f"{location}.")
        else:
            raise ValueError(
                f"parameter '{location}' has unsupported type {type(value).__name__}; "
                "expected string, number, boolean or nested map"
            )
    return validated


def render_parameter_value(value: ParameterValue) -> str:
    """Render a parameter value deterministically (sorted keys, lowercase booleans)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        inner = ", ".join(
            f"{key}: {render_parameter_value(value[key])}" for key in sorted(value)
        )
        return "{" + inner + "}"
    return str(value)


@dataclass
class DunaRecord:
    """Core domain entity describing an organisation's governance attributes.

    The three pipeline-state fields (contract_generated, contract_source,
    contract_address) are written together by the repository once a deployment
    is confirmed; update() never touches them.
    """

    name: str
    description: str = ""
    membership_status: str = "pending"
    compliance_level: int = 0
    parameters: dict[str, ParameterValue] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    contract_generated: bool = False
    contract_source: str = ""
    contract_address: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        name: str | None = None,
        description: str | None = None,
        membership_status: str | None = None,
        compliance_level: int | None = None,
        parameters: dict[str, ParameterValue] | None = None,
    ) -> None:
        """Update descriptive fields and refresh the updated_at timestamp."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if membership_status is not None:
            self.membership_status = membership_status
        if compliance_level is not None:
            self.compliance_level = compliance_level
        if parameters is not None:
            self.parameters = parameters
        self.updated_at = datetime.now(timezone.utc)
