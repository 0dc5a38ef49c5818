"""Abstract repository interface for tickets."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities import Ticket, TicketDetail, TicketQuery


class TicketRepository(ABC):
    """Port: persistence operations for tickets and their tag links."""

    @abstractmethod
    async def get_by_id(self, ticket_id: str) -> Ticket | None: ...

    @abstractmethod
    async def get_detail(self, ticket_id: str) -> TicketDetail | None:
        """Ticket with team name, creator name, tags and metadata values."""
        ...

    @abstractmethod
    async def search(self, query: TicketQuery, *, skip: int = 0, limit: int = 100) -> list[Ticket]:
        """Return tickets matching every predicate and carrying every tag in the query.

        An empty query returns all tickets, newest first.
        """
        ...

    @abstractmethod
    async def create(self, ticket: Ticket) -> Ticket: ...

    @abstractmethod
    async def set_team(self, ticket_id: str, team_id: str | None) -> Ticket | None: ...

    @abstractmethod
    async def delete(self, ticket_id: str) -> bool: ...

    @abstractmethod
    async def delete_many(self, ticket_ids: list[str]) -> int:
        """Delete all listed tickets in one statement; returns rows affected."""
        ...

    @abstractmethod
    async def move_many(self, ticket_ids: list[str], team_id: str | None) -> int:
        """Assign all listed tickets to ``team_id`` in one statement."""
        ...

    @abstractmethod
    async def add_tag(self, ticket_id: str, tag_id: str) -> None:
        """Link a tag to a ticket; linking twice is a no-op."""
        ...

    @abstractmethod
    async def remove_tag(self, ticket_id: str, tag_id: str) -> bool: ...
