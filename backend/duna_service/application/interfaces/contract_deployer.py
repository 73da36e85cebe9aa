"""Abstract interface (port) for contract deployment."""

from abc import ABC, abstractmethod

from duna_service.domain.entities import CompiledContract, DeployedContract


class ContractDeployer(ABC):
    """Deploys compiled bytecode from a preconfigured sender account."""

    @abstractmethod
    async def deploy(self, contract: CompiledContract) -> DeployedContract:
        """Submit a zero-argument constructor transaction and wait for it.

        Raises:
            DeploymentError: With stage ``submission`` or ``confirmation``.
        """
        ...
