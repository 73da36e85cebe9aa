from .duna_record import (
    DunaRecordCreate,
    DunaRecordUpdate,
    DunaRecordResponse,
    ContractGenerationResponse,
)

__all__ = [
    "DunaRecordCreate",
    "DunaRecordUpdate",
    "DunaRecordResponse",
    "ContractGenerationResponse",
]
