"""DUNA record CRUD and contract generation endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from duna_service.application.schemas.duna_record import (
    ContractGenerationResponse,
    DunaRecordCreate,
    DunaRecordResponse,
    DunaRecordUpdate,
)
from duna_service.application.services import ContractPipelineService, DunaRecordService
from duna_service.domain.exceptions import (
    ContractAlreadyGeneratedError,
    ContractPipelineError,
    EntityNotFoundError,
    PipelineConfigurationError,
)
from duna_service.infrastructure.dependencies import (
    get_contract_pipeline_service,
    get_duna_record_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/duna", tags=["DUNA Records"])


@router.get("", response_model=list[DunaRecordResponse])
async def list_records(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: DunaRecordService = Depends(get_duna_record_service),
) -> list[DunaRecordResponse]:
    """Retrieve a paginated list of DUNA records, newest first."""
    records = await service.list_records(skip=skip, limit=limit)
    return [DunaRecordResponse.model_validate(r, from_attributes=True) for r in records]


@router.get("/{record_id}", response_model=DunaRecordResponse)
async def get_record(
    record_id: str,
    service: DunaRecordService = Depends(get_duna_record_service),
) -> DunaRecordResponse:
    """Retrieve a single DUNA record by ID."""
    try:
        record = await service.get_record(record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DunaRecordResponse.model_validate(record, from_attributes=True)


@router.post("", response_model=DunaRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_record(
    data: DunaRecordCreate,
    service: DunaRecordService = Depends(get_duna_record_service),
) -> DunaRecordResponse:
    """Create a new DUNA record."""
    record = await service.create_record(data)
    return DunaRecordResponse.model_validate(record, from_attributes=True)


@router.put("/{record_id}", response_model=DunaRecordResponse)
async def update_record(
    record_id: str,
    data: DunaRecordUpdate,
    service: DunaRecordService = Depends(get_duna_record_service),
) -> DunaRecordResponse:
    """Update the descriptive fields of an existing DUNA record."""
    try:
        record = await service.update_record(record_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DunaRecordResponse.model_validate(record, from_attributes=True)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    record_id: str,
    service: DunaRecordService = Depends(get_duna_record_service),
) -> None:
    """Delete a DUNA record by ID."""
    try:
        await service.delete_record(record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{record_id}/generate-contract", response_model=ContractGenerationResponse)
async def generate_contract(
    record_id: str,
    service: ContractPipelineService = Depends(get_contract_pipeline_service),
) -> ContractGenerationResponse:
    """Generate, compile and deploy the record's contract (once per record)."""
    try:
        result = await service.generate_contract(record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ContractAlreadyGeneratedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PipelineConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except ContractPipelineError as e:
        logger.error("Contract pipeline failed for DunaRecord %s: %s", record_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return ContractGenerationResponse.model_validate(result, from_attributes=True)
