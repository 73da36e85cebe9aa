"""Integration tests for the SQLAlchemy DunaRecord repository (aiosqlite)."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from duna_service.domain.entities import DunaRecord
from duna_service.infrastructure.database import Base
from duna_service.infrastructure.database.repositories import SQLAlchemyDunaRecordRepository


@pytest_asyncio.fixture
async def session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as db_session:
        yield db_session

    await engine.dispose()


@pytest.fixture
def repository(session) -> SQLAlchemyDunaRecordRepository:
    return SQLAlchemyDunaRecordRepository(session)


@pytest.mark.asyncio
async def test_create_and_get_roundtrip(repository):
    record = DunaRecord(
        name="Alpha Co",
        membership_status="active",
        compliance_level=3,
        parameters={"quorum": 51, "open": True, "meta": {"region": "WY"}},
    )
    await repository.create(record)

    loaded = await repository.get_by_id(record.id)

    assert loaded is not None
    assert loaded.name == "Alpha Co"
    assert loaded.compliance_level == 3
    assert loaded.parameters == {"quorum": 51, "open": True, "meta": {"region": "WY"}}
    assert (loaded.contract_generated, loaded.contract_source, loaded.contract_address) == (
        False,
        "",
        "",
    )


@pytest.mark.asyncio
async def test_get_missing_returns_none(repository):
    assert await repository.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_get_all_is_newest_first_and_paginated(repository):
    now = datetime.now(timezone.utc)
    for offset, name in enumerate(["oldest", "middle", "newest"]):
        await repository.create(DunaRecord(name=name, created_at=now + timedelta(seconds=offset)))

    names = [r.name for r in await repository.get_all()]
    assert names == ["newest", "middle", "oldest"]

    page = await repository.get_all(skip=1, limit=1)
    assert [r.name for r in page] == ["middle"]


@pytest.mark.asyncio
async def test_update_does_not_write_pipeline_fields(repository):
    record = await repository.create(DunaRecord(name="Alpha Co"))
    record.update(name="Alpha Co Ltd")
    record.contract_generated = True
    record.contract_address = "0x1"

    updated = await repository.update(record)

    assert updated.name == "Alpha Co Ltd"
    assert updated.contract_generated is False
    assert updated.contract_address == ""


@pytest.mark.asyncio
async def test_delete(repository):
    record = await repository.create(DunaRecord(name="Delete Me"))

    assert await repository.delete(record.id) is True
    assert await repository.get_by_id(record.id) is None
    assert await repository.delete(record.id) is False


@pytest.mark.asyncio
async def test_record_deployment_writes_all_fields_once(repository):
    record = await repository.create(DunaRecord(name="Alpha Co"))
    # Load it so the identity map holds the pre-deployment state.
    await repository.get_by_id(record.id)

    updated = await repository.record_deployment(record.id, "contract A {}", "0xabc")
    await repository.commit()

    assert updated is not None
    assert (updated.contract_generated, updated.contract_source, updated.contract_address) == (
        True,
        "contract A {}",
        "0xabc",
    )

    second = await repository.record_deployment(record.id, "contract B {}", "0xdef")
    assert second is None

    reloaded = await repository.get_by_id(record.id)
    assert reloaded.contract_source == "contract A {}"
    assert reloaded.contract_address == "0xabc"


@pytest.mark.asyncio
async def test_record_deployment_for_missing_record(repository):
    assert await repository.record_deployment("missing", "contract A {}", "0xabc") is None
