"""Abstract interface (port) for Solidity compilation."""

from abc import ABC, abstractmethod

from duna_service.domain.entities import CompiledContract


class SolidityCompiler(ABC):
    """Compiles a single in-memory Solidity source file."""

    @abstractmethod
    async def compile(self, source: str) -> CompiledContract:
        """Compile ``source`` and return the first contract it defines.

        Raises:
            CompilationError: When the compiler reports error-severity
                diagnostics or the source unit defines no deployable contract.
        """
        ...
