"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from web3 import AsyncHTTPProvider, AsyncWeb3

from duna_service.application.interfaces import (
    CodeGenerator,
    ContractDeployer,
    SolidityCompiler,
    SourceTransform,
)
from duna_service.application.services import (
    ContractPipelineService,
    DunaRecordService,
    RecordLockRegistry,
)
from duna_service.config import get_settings
from duna_service.infrastructure.chain import Web3ContractDeployer, load_account
from duna_service.infrastructure.compiler import SolcxBackend, StandardJsonCompiler
from duna_service.infrastructure.database.repositories import SQLAlchemyDunaRecordRepository
from duna_service.infrastructure.database.session import get_db_session
from duna_service.infrastructure.generation import ChatCompletionGenerator
from duna_service.infrastructure.transforms import get_source_transform

logger = logging.getLogger(__name__)


@lru_cache
def get_record_lock_registry() -> RecordLockRegistry:
    """Process-wide lock registry shared by every pipeline request."""
    return RecordLockRegistry()


@lru_cache
def get_solidity_compiler() -> SolidityCompiler:
    settings = get_settings()
    return StandardJsonCompiler(
        SolcxBackend(settings.solc_version, auto_install=settings.solc_auto_install)
    )


@lru_cache
def get_source_transform_stage() -> SourceTransform:
    return get_source_transform(get_settings().source_transform)


def get_code_generator() -> CodeGenerator | None:
    """Generation client, or None while no API key is configured."""
    settings = get_settings()
    if not settings.generation_configured:
        logger.warning("GENERATION_API_KEY is not configured; contract generation is disabled.")
        return None
    return ChatCompletionGenerator(
        api_key=settings.generation_api_key.strip(),
        base_url=settings.generation_base_url,
        model=settings.generation_model,
        max_tokens=settings.generation_max_tokens,
        temperature=settings.generation_temperature,
        timeout=settings.generation_timeout,
    )


@lru_cache
def get_contract_deployer() -> ContractDeployer | None:
    """Deployer bound to the configured RPC node and account, or None."""
    settings = get_settings()
    if not settings.chain_configured:
        logger.warning("RPC_URL / signing key not configured; contract deployment is disabled.")
        return None
    try:
        account = load_account(
            private_key=settings.private_key,
            private_key_file=settings.private_key_file,
            keystore_password=settings.keystore_password,
        )
    except Exception:
        logger.exception("Failed to load the deployment account")
        return None

    w3 = AsyncWeb3(AsyncHTTPProvider(settings.rpc_url))
    logger.info("Deployer ready — sender=%s", account.address)
    return Web3ContractDeployer(
        w3,
        account,
        chain_id=settings.chain_id,
        confirmation_timeout=settings.deploy_confirmation_timeout,
        poll_latency=settings.deploy_poll_latency,
    )


async def get_duna_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DunaRecordService, None]:
    """Provides a DunaRecordService instance with its repository wired up."""
    repository = SQLAlchemyDunaRecordRepository(session)
    yield DunaRecordService(repository)


async def get_contract_pipeline_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ContractPipelineService, None]:
    """Provides the contract pipeline with generator, compiler and deployer."""
    repository = SQLAlchemyDunaRecordRepository(session)
    yield ContractPipelineService(
        repository=repository,
        generator=get_code_generator(),
        compiler=get_solidity_compiler(),
        deployer=get_contract_deployer(),
        source_transform=get_source_transform_stage(),
        lock_registry=get_record_lock_registry(),
    )
