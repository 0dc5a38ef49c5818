"""Abstract repository interface for LLM request logs."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities import ServiceRequestLog


class ServiceRequestLogRepository(ABC):
    """Port: append-only store of model requests."""

    @abstractmethod
    async def create(self, log: ServiceRequestLog) -> ServiceRequestLog:
        """Persist a log entry and return it with its assigned id."""
        ...

    @abstractmethod
    async def list_recent(
        self, *, feature: str | None = None, limit: int = 100
    ) -> list[ServiceRequestLog]:
        """Most recent entries first, optionally restricted to one feature."""
        ...
