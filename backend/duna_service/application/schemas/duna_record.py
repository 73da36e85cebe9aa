"""Pydantic DTOs (Data Transfer Objects) for the DunaRecord feature.

JSON field names are camelCase on the wire; snake_case is accepted on input.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from duna_service.domain.entities import validate_parameters

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DunaRecordCreate(BaseModel):
    """Schema for creating a new DUNA record."""

    model_config = _CAMEL_CONFIG

    name: str = Field(..., min_length=1, max_length=200, examples=["Alpha Co"])
    description: str = Field("", max_length=10_000)
    membership_status: str = Field("pending", max_length=50, examples=["active"])
    compliance_level: int = Field(0, ge=0, examples=[3])
    parameters: dict[str, Any] = Field(
        default_factory=dict, examples=[{"quorum": 51, "jurisdiction": "Wyoming"}],
    )

    @field_validator("parameters")
    @classmethod
    def _check_parameters(cls, value: dict[str, Any]) -> dict[str, Any]:
        return validate_parameters(value)


class DunaRecordUpdate(BaseModel):
    """Schema for updating an existing record — all fields optional.

    Pipeline-state fields are not accepted here; only a pipeline run sets them.
    """

    model_config = _CAMEL_CONFIG

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10_000)
    membership_status: str | None = Field(None, max_length=50)
    compliance_level: int | None = Field(None, ge=0)
    parameters: dict[str, Any] | None = None

    @field_validator("parameters")
    @classmethod
    def _check_parameters(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if value is None:
            return None
        return validate_parameters(value)


class DunaRecordResponse(BaseModel):
    """Schema returned to the client."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    name: str
    description: str
    membership_status: str
    compliance_level: int
    parameters: dict[str, Any]
    contract_generated: bool
    contract_source: str
    contract_address: str
    created_at: datetime
    updated_at: datetime


class ContractGenerationResponse(BaseModel):
    """Result of a successful generate-and-deploy run."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    contract_address: str
    contract_source: str
    contract_name: str = ""
    transaction_hash: str = ""
