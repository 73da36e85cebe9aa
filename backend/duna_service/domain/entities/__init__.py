from .duna_record import (
    DunaRecord,
    ParameterValue,
    render_parameter_value,
    validate_parameters,
)
from .contract import CompiledContract, ContractDeploymentResult, DeployedContract

__all__ = [
    "DunaRecord",
    "ParameterValue",
    "render_parameter_value",
    "validate_parameters",
    "CompiledContract",
    "ContractDeploymentResult",
    "DeployedContract",
]
