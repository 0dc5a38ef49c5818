"""Application service (use case) for ticket operations."""

from helpdesk.application.interfaces import TeamRepository, TicketRepository, UserRepository
from helpdesk.application.services.bulk_executors import TicketBulkExecutor
from helpdesk.application.services.bulk_mutation_controller import (
    BulkMutationController,
    MutationOutcome,
)
from helpdesk.domain.entities import Ticket, TicketDetail, TicketQuery
from helpdesk.domain.exceptions import EntityNotFoundError


class TicketService:
    """Orchestrates ticket logic. Depends on repository ports (DI)."""

    def __init__(self, tickets: TicketRepository, teams: TeamRepository, users: UserRepository):
        self._tickets = tickets
        self._teams = teams
        self._users = users

    async def _require_team(self, team_id: str) -> None:
        if await self._teams.get_by_id(team_id) is None:
            raise EntityNotFoundError("Team", team_id)

    async def get_ticket(self, ticket_id: str) -> TicketDetail:
        detail = await self._tickets.get_detail(ticket_id)
        if detail is None:
            raise EntityNotFoundError("Ticket", ticket_id)
        return detail

    async def search(self, query: TicketQuery, skip: int = 0, limit: int = 100) -> list[Ticket]:
        return await self._tickets.search(query, skip=skip, limit=limit)

    async def list_tickets(self, team_id: str | None = None, skip: int = 0, limit: int = 100) -> list[Ticket]:
        return await self._tickets.search(TicketQuery(team_id=team_id), skip=skip, limit=limit)

    async def create_ticket(
        self,
        title: str,
        description: str | None = None,
        creator_id: str | None = None,
        team_id: str | None = None,
    ) -> Ticket:
        if not title.strip():
            raise ValueError("Ticket title must not be empty")
        if creator_id and await self._users.get_by_id(creator_id) is None:
            raise EntityNotFoundError("User", creator_id)
        if team_id:
            await self._require_team(team_id)
        ticket = Ticket(
            title=title.strip(),
            description=description,
            creator_id=creator_id,
            team_id=team_id,
        )
        return await self._tickets.create(ticket)

    async def set_team(self, ticket_id: str, team_id: str | None) -> Ticket:
        if team_id:
            await self._require_team(team_id)
        ticket = await self._tickets.set_team(ticket_id, team_id)
        if ticket is None:
            raise EntityNotFoundError("Ticket", ticket_id)
        return ticket

    async def delete_ticket(self, ticket_id: str) -> None:
        if not await self._tickets.delete(ticket_id):
            raise EntityNotFoundError("Ticket", ticket_id)

    def bulk_controller(self) -> BulkMutationController:
        return BulkMutationController(TicketBulkExecutor(self._tickets, self._teams))

    async def bulk_delete(self, ticket_ids: list[str]) -> MutationOutcome:
        controller = self.bulk_controller()
        controller.select_all(ticket_ids)
        controller.request_delete()
        return await controller.confirm()

    async def bulk_move_team(self, ticket_ids: list[str], team_id: str) -> MutationOutcome:
        controller = self.bulk_controller()
        controller.select_all(ticket_ids)
        controller.request_reassign(team_id)
        return await controller.confirm()
