"""Value objects passed between the compile, deploy and persist stages."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CompiledContract:
    """ABI and EVM bytecode for one contract out of a compiled source unit."""

    name: str
    abi: list[dict[str, Any]]
    bytecode: str  # hex, without 0x prefix as reported by solc
    warnings: list[str] = field(default_factory=list)


@dataclass
class ContractDeploymentResult:
    """Outcome of a full pipeline run, returned to the caller."""

    record_id: str
    contract_address: str
    contract_source: str
    contract_name: str = ""
    transaction_hash: str = ""


@dataclass
class DeployedContract:
    """On-chain location of a confirmed deployment."""

    address: str
    transaction_hash: str
    block_number: int | None = None
