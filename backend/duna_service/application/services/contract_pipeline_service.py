"""Contract pipeline service: record to prompt to source to bytecode to address."""

import logging

from duna_service.application.interfaces import (
    CodeGenerator,
    ContractDeployer,
    DunaRecordRepository,
    SolidityCompiler,
    SourceTransform,
)
from duna_service.application.services.contract_prompt import build_contract_prompt
from duna_service.application.services.record_locks import RecordLockRegistry
from duna_service.domain.entities import ContractDeploymentResult, DunaRecord
from duna_service.domain.exceptions import (
    ContractAlreadyGeneratedError,
    EntityNotFoundError,
    PipelineConfigurationError,
)
from duna_service.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("ContractPipelineService")


class ContractPipelineService:
    """Runs generation and deployment for one record at a time.

    Pipeline: Fetch → Prompt → Generate → Transform → Compile → Deploy → Persist

    Any stage failure aborts the run before the record is touched; the three
    pipeline-state fields are written in a single conditional update after
    the deployment is confirmed.
    """

    def __init__(
        self,
        repository: DunaRecordRepository,
        generator: CodeGenerator | None,
        compiler: SolidityCompiler,
        deployer: ContractDeployer | None,
        *,
        source_transform: SourceTransform | None = None,
        lock_registry: RecordLockRegistry | None = None,
    ):
        self._repository = repository
        self._generator = generator
        self._compiler = compiler
        self._deployer = deployer
        self._transform = source_transform
        self._locks = lock_registry if lock_registry is not None else RecordLockRegistry()

    async def generate_contract(self, record_id: str) -> ContractDeploymentResult:
        """Generate, compile and deploy a contract for ``record_id``.

        Raises:
            EntityNotFoundError: No record with that id.
            ContractAlreadyGeneratedError: The record already has a contract.
            PipelineConfigurationError: Generation or chain access not configured.
            GenerationError, CompilationError, DeploymentError: Stage failures.
        """
        async with self._locks.lock_for(record_id):
            record = await self._load_pending_record(record_id)
            self._ensure_configured()
            return await self._run(record)

    async def _load_pending_record(self, record_id: str) -> DunaRecord:
        record = await self._repository.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError("DunaRecord", record_id)
        if record.contract_generated:
            raise ContractAlreadyGeneratedError(record_id)
        return record

    def _ensure_configured(self) -> None:
        missing = []
        if self._generator is None:
            missing.append("generation API key")
        if self._deployer is None:
            missing.append("RPC URL and signing key")
        if missing:
            raise PipelineConfigurationError(
                "Contract pipeline is not configured: missing " + ", ".join(missing)
            )

    async def _run(self, record: DunaRecord) -> ContractDeploymentResult:
        plog.separator(f"Contract: {record.name}")

        with plog.timed_step(PipelineStage.PROMPT, "Building prompt", record_id=record.id):
            prompt = build_contract_prompt(record)
            plog.detail("Prompt ready", chars=len(prompt))

        with plog.timed_step(PipelineStage.GENERATE, "Generating Solidity source"):
            generated = await self._generator.generate(prompt)
            plog.detail("Source received", provider=self._generator.provider_name, chars=len(generated))

        stored_source = generated
        if self._transform is not None:
            with plog.timed_step(PipelineStage.TRANSFORM, f"Applying '{self._transform.name}' transform"):
                stored_source = self._transform.apply(generated)
            # The compiler always sees the plain source.
            compile_source = self._transform.invert(stored_source)
        else:
            compile_source = generated

        with plog.timed_step(PipelineStage.COMPILE, "Compiling contract"):
            compiled = await self._compiler.compile(compile_source)
            plog.detail(
                f"Selected contract '{compiled.name}'",
                abi_entries=len(compiled.abi),
                bytecode_bytes=len(compiled.bytecode) // 2,
                warnings=len(compiled.warnings),
            )

        with plog.timed_step(PipelineStage.DEPLOY, f"Deploying '{compiled.name}'"):
            deployed = await self._deployer.deploy(compiled)
            plog.detail("Deployment confirmed", address=deployed.address, tx=deployed.transaction_hash)

        with plog.timed_step(PipelineStage.PERSIST, "Recording deployment"):
            updated = await self._repository.record_deployment(
                record.id, stored_source, deployed.address
            )
            if updated is None:
                logger.error(
                    "Contract for DunaRecord %s deployed at %s but the record "
                    "could not be updated",
                    record.id,
                    deployed.address,
                )
                if await self._repository.get_by_id(record.id) is None:
                    raise EntityNotFoundError("DunaRecord", record.id)
                raise ContractAlreadyGeneratedError(record.id)
            await self._repository.commit()

        plog.step_complete(PipelineStage.COMPLETE, f"Contract live at {deployed.address}")
        return ContractDeploymentResult(
            record_id=record.id,
            contract_address=updated.contract_address,
            contract_source=updated.contract_source,
            contract_name=compiled.name,
            transaction_hash=deployed.transaction_hash,
        )
