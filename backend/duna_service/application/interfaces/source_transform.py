"""Abstract interface (port) for the optional stored-source transform."""

from abc import ABC, abstractmethod


class SourceTransform(ABC):
    """A deterministic, reversible text transform applied to generated source.

    ``invert(apply(text)) == text`` must hold for every string.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def apply(self, text: str) -> str:
        ...

    @abstractmethod
    def invert(self, text: str) -> str:
        ...
