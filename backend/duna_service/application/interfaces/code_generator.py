"""Abstract interface (port) for LLM-backed Solidity source generation."""

from abc import ABC, abstractmethod


class CodeGenerator(ABC):
    """Turns a prompt into raw generated source text."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying the backing provider."""
        ...

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send one generation request and return the generated text.

        Raises:
            GenerationError: On network failure, non-2xx status or a
                response without generated text. Never returns partial text.
        """
        ...
