"""Abstract repository interface for ticket messages."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities import TicketMessage


class MessageRepository(ABC):
    @abstractmethod
    async def list_for_ticket(self, ticket_id: str) -> list[TicketMessage]:
        """Messages of a ticket, oldest first, with sender names resolved."""
        ...

    @abstractmethod
    async def create(self, message: TicketMessage) -> TicketMessage: ...
