"""HTTP tests for the DUNA record endpoints, wired to in-memory fakes."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from duna_service.application.services import ContractPipelineService, DunaRecordService
from duna_service.domain.exceptions import CompilationError, GenerationError
from duna_service.infrastructure.dependencies import (
    get_contract_pipeline_service,
    get_duna_record_service,
)
from duna_service.main import app
from tests.fakes import (
    DEPLOYED_ADDRESS,
    STUB_SOURCE,
    FakeCodeGenerator,
    FakeContractDeployer,
    FakeDunaRecordRepository,
    FakeSolidityCompiler,
)


@pytest.fixture
def repository() -> FakeDunaRecordRepository:
    return FakeDunaRecordRepository()


@pytest.fixture
def pipeline_parts() -> dict:
    return {
        "generator": FakeCodeGenerator(),
        "compiler": FakeSolidityCompiler(),
        "deployer": FakeContractDeployer(),
    }


@pytest_asyncio.fixture
async def client(repository, pipeline_parts):
    async def _record_service():
        yield DunaRecordService(repository)

    async def _pipeline_service():
        yield ContractPipelineService(repository=repository, **pipeline_parts)

    app.dependency_overrides[get_duna_record_service] = _record_service
    app.dependency_overrides[get_contract_pipeline_service] = _pipeline_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


async def _create_alpha(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/v1/duna",
        json={"name": "Alpha Co", "membershipStatus": "active", "complianceLevel": 3},
    )
    assert response.status_code == 201
    return response.json()


# ── CRUD ──


@pytest.mark.asyncio
async def test_create_and_list_records(client):
    created = await _create_alpha(client)

    assert created["name"] == "Alpha Co"
    assert created["membershipStatus"] == "active"
    assert created["complianceLevel"] == 3
    assert created["contractGenerated"] is False
    assert created["contractSource"] == ""
    assert created["contractAddress"] == ""

    response = await client.get("/api/v1/duna")
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [created["id"]]


@pytest.mark.asyncio
async def test_create_rejects_list_parameters(client):
    response = await client.post(
        "/api/v1/duna", json={"name": "Alpha Co", "parameters": {"members": ["a"]}}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_cannot_touch_pipeline_fields(client):
    created = await _create_alpha(client)

    response = await client.put(
        f"/api/v1/duna/{created['id']}",
        json={"complianceLevel": 4, "contractGenerated": True, "contractAddress": "0x1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["complianceLevel"] == 4
    assert body["contractGenerated"] is False
    assert body["contractAddress"] == ""


@pytest.mark.asyncio
async def test_get_and_delete_record(client):
    created = await _create_alpha(client)

    assert (await client.get(f"/api/v1/duna/{created['id']}")).status_code == 200
    assert (await client.delete(f"/api/v1/duna/{created['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/duna/{created['id']}")).status_code == 404
    assert (await client.delete(f"/api/v1/duna/{created['id']}")).status_code == 404


# ── Contract generation ──


@pytest.mark.asyncio
async def test_generate_contract_success(client, repository):
    created = await _create_alpha(client)

    response = await client.post(f"/api/v1/duna/{created['id']}/generate-contract")

    assert response.status_code == 200
    body = response.json()
    assert body["contractAddress"] == DEPLOYED_ADDRESS
    assert body["contractSource"] == STUB_SOURCE

    stored = repository.stored(created["id"])
    assert stored.contract_generated is True
    assert stored.contract_address == DEPLOYED_ADDRESS


@pytest.mark.asyncio
async def test_generate_contract_twice_returns_400(client):
    created = await _create_alpha(client)
    await client.post(f"/api/v1/duna/{created['id']}/generate-contract")

    response = await client.post(f"/api/v1/duna/{created['id']}/generate-contract")

    assert response.status_code == 400
    assert "already generated" in response.json()["detail"]


@pytest.mark.asyncio
async def test_generate_contract_for_missing_record_returns_404(client):
    response = await client.post("/api/v1/duna/unknown/generate-contract")
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "stage, error",
    [
        ("generator", GenerationError("upstream unavailable", status_code=503)),
        ("compiler", CompilationError(["ParserError: Expected ';'"])),
    ],
)
async def test_pipeline_failure_returns_500_and_leaves_record(
    client, repository, pipeline_parts, stage, error
):
    pipeline_parts[stage] = type(pipeline_parts[stage])(error=error)
    created = await _create_alpha(client)

    response = await client.post(f"/api/v1/duna/{created['id']}/generate-contract")

    assert response.status_code == 500
    assert "failed" in response.json()["detail"]
    assert repository.stored(created["id"]).contract_generated is False


@pytest.mark.asyncio
async def test_unconfigured_pipeline_returns_503(client, pipeline_parts):
    pipeline_parts["generator"] = None
    created = await _create_alpha(client)

    response = await client.post(f"/api/v1/duna/{created['id']}/generate-contract")

    assert response.status_code == 503
