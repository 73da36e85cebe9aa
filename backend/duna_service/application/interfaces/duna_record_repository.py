"""Abstract repository interface (port) for DunaRecord persistence."""

from abc import ABC, abstractmethod

from duna_service.domain.entities import DunaRecord


class DunaRecordRepository(ABC):
    """Port for DUNA record persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, record_id: str) -> DunaRecord | None:
        """Retrieve a single record by its UUID."""
        ...

    @abstractmethod
    async def get_all(self, *, skip: int = 0, limit: int = 100) -> list[DunaRecord]:
        """Retrieve a paginated list of records, newest first."""
        ...

    @abstractmethod
    async def create(self, record: DunaRecord) -> DunaRecord:
        """Persist a new record and return it."""
        ...

    @abstractmethod
    async def update(self, record: DunaRecord) -> DunaRecord:
        """Update the descriptive fields of an existing record."""
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def record_deployment(
        self, record_id: str, contract_source: str, contract_address: str
    ) -> DunaRecord | None:
        """Write all pipeline-state fields in one conditional update.

        The update only applies while ``contract_generated`` is still false.
        Returns the updated record, or None when no row matched (record
        missing or already generated).
        """
        ...

    @abstractmethod
    async def commit(self) -> None:
        """Make pending changes durable before the caller releases its lock."""
        ...
