"""Concrete repository implementation for DunaRecord backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from duna_service.application.interfaces import DunaRecordRepository
from duna_service.domain.entities import DunaRecord
from duna_service.infrastructure.database.models import DunaRecordModel


class SQLAlchemyDunaRecordRepository(DunaRecordRepository):
    """Implements the DunaRecordRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: DunaRecordModel) -> DunaRecord:
        """Map ORM model → domain entity."""
        return DunaRecord(
            id=model.id,
            name=model.name,
            description=model.description,
            membership_status=model.membership_status,
            compliance_level=model.compliance_level,
            parameters=dict(model.parameters or {}),
            contract_generated=model.contract_generated,
            contract_source=model.contract_source,
            contract_address=model.contract_address,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: DunaRecord) -> DunaRecordModel:
        """Map domain entity → ORM model (for creation)."""
        return DunaRecordModel(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            membership_status=entity.membership_status,
            compliance_level=entity.compliance_level,
            parameters=entity.parameters,
            contract_generated=entity.contract_generated,
            contract_source=entity.contract_source,
            contract_address=entity.contract_address,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, record_id: str) -> DunaRecord | None:
        result = await self._session.get(DunaRecordModel, record_id)
        return self._to_entity(result) if result else None

    async def get_all(self, *, skip: int = 0, limit: int = 100) -> list[DunaRecord]:
        stmt = (
            select(DunaRecordModel)
            .order_by(DunaRecordModel.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, record: DunaRecord) -> DunaRecord:
        model = self._to_model(record)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, record: DunaRecord) -> DunaRecord:
        model = await self._session.get(DunaRecordModel, record.id)
        if model is None:
            raise ValueError(f"DunaRecord {record.id} not found in database")
        # Pipeline-state columns are only written by record_deployment().
        model.name = record.name
        model.description = record.description
        model.membership_status = record.membership_status
        model.compliance_level = record.compliance_level
        model.parameters = record.parameters
        model.updated_at = record.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, record_id: str) -> bool:
        model = await self._session.get(DunaRecordModel, record_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def record_deployment(
        self, record_id: str, contract_source: str, contract_address: str
    ) -> DunaRecord | None:
        stmt = (
            update(DunaRecordModel)
            .where(
                DunaRecordModel.id == record_id,
                DunaRecordModel.contract_generated.is_(False),
            )
            .values(
                contract_generated=True,
                contract_source=contract_source,
                contract_address=contract_address,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:
            return None
        model = await self._session.get(DunaRecordModel, record_id, populate_existing=True)
        return self._to_entity(model) if model else None

    async def commit(self) -> None:
        await self._session.commit()
