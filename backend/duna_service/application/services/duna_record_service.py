"""Application service (use case) for DunaRecord CRUD operations."""

from typing import Any

from duna_service.application.interfaces import DunaRecordRepository
from duna_service.application.schemas.duna_record import DunaRecordCreate, DunaRecordUpdate
from duna_service.domain.entities import DunaRecord
from duna_service.domain.exceptions import EntityNotFoundError


class DunaRecordService:
    """Orchestrates DUNA record CRUD logic. Depends on the repository port (DI)."""

    def __init__(self, repository: DunaRecordRepository):
        self._repository = repository

    async def get_record(self, record_id: str) -> DunaRecord:
        record = await self._repository.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError("DunaRecord", record_id)
        return record

    async def list_records(self, *, skip: int = 0, limit: int = 100) -> list[DunaRecord]:
        return await self._repository.get_all(skip=skip, limit=limit)

    async def create_record(self, data: DunaRecordCreate) -> DunaRecord:
        record = DunaRecord(
            name=data.name,
            description=data.description,
            membership_status=data.membership_status,
            compliance_level=data.compliance_level,
            parameters=data.parameters,
        )
        return await self._repository.create(record)

    async def update_record(self, record_id: str, data: DunaRecordUpdate) -> DunaRecord:
        record = await self.get_record(record_id)

        kwargs: dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)
        record.update(**kwargs)
        return await self._repository.update(record)

    async def delete_record(self, record_id: str) -> bool:
        exists = await self._repository.get_by_id(record_id)
        if exists is None:
            raise EntityNotFoundError("DunaRecord", record_id)
        return await self._repository.delete(record_id)
