from .duna_record_repository import DunaRecordRepository
from .code_generator import CodeGenerator
from .solidity_compiler import SolidityCompiler
from .contract_deployer import ContractDeployer
from .source_transform import SourceTransform

__all__ = [
    "DunaRecordRepository",
    "CodeGenerator",
    "SolidityCompiler",
    "ContractDeployer",
    "SourceTransform",
]
