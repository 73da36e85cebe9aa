"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ContractAlreadyGeneratedError(Exception):
    """Raised when a record already went through generation and deployment."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Contract already generated for DunaRecord '{record_id}'")


class ContractPipelineError(Exception):
    """Base class for failures of a contract pipeline stage."""


class PipelineConfigurationError(ContractPipelineError):
    """Raised when generation or chain credentials are missing."""


class GenerationError(ContractPipelineError):
    """Raised when the generation endpoint fails or returns no usable text.

    Provider-agnostic: covers network errors, non-2xx responses and
    malformed response bodies alike.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        prefix = f"{status_code}: " if status_code is not None else ""
        super().__init__(f"Contract generation failed — {prefix}{message}")


class CompilationError(ContractPipelineError):
    """Raised when the compiler reports errors or produces no deployable contract."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        summary = "; ".join(self.errors) if self.errors else "unknown compiler error"
        super().__init__(f"Contract compilation failed — {summary}")


class DeploymentError(ContractPipelineError):
    """Raised when a deployment transaction cannot be submitted or confirmed.

    ``stage`` is ``"submission"`` or ``"confirmation"``; the underlying cause
    is attached as ``__cause__`` by the raiser.
    """

    SUBMISSION = "submission"
    CONFIRMATION = "confirmation"

    def __init__(self, stage: str, message: str):
        self.stage = stage
        self.message = message
        super().__init__(f"Contract deployment failed during {stage} — {message}")
