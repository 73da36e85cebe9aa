from .contract_pipeline_service import ContractPipelineService
from .contract_prompt import build_contract_prompt, contract_name_for
from .duna_record_service import DunaRecordService
from .record_locks import RecordLockRegistry

__all__ = [
    "ContractPipelineService",
    "build_contract_prompt",
    "contract_name_for",
    "DunaRecordService",
    "RecordLockRegistry",
]
