"""Bulk mutation executors for the user and ticket listings."""

from helpdesk.application.interfaces import BulkMutationExecutor, TeamRepository, TicketRepository, UserRepository
from helpdesk.domain.exceptions import EntityNotFoundError


async def _require_team(teams: TeamRepository, team_id: str) -> None:
    if await teams.get_by_id(team_id) is None:
        raise EntityNotFoundError("Team", team_id)


class UserBulkExecutor(BulkMutationExecutor):
    entity_name = "user"

    def __init__(self, users: UserRepository, teams: TeamRepository):
        self._users = users
        self._teams = teams

    async def delete_many(self, ids: list[str]) -> int:
        return await self._users.delete_many(ids)

    async def reassign_many(self, ids: list[str], target_team_id: str) -> int:
        await _require_team(self._teams, target_team_id)
        return await self._users.reassign_many(ids, target_team_id)

    def delete_consequences(self, count: int) -> str:
        noun = "user" if count == 1 else "users"
        return (
            f"{count} {noun} will be permanently deleted, together with the tickets "
            "they created, the messages they sent, metadata values that reference "
            "them and their skill assignments."
        )


class TicketBulkExecutor(BulkMutationExecutor):
    entity_name = "ticket"

    def __init__(self, tickets: TicketRepository, teams: TeamRepository):
        self._tickets = tickets
        self._teams = teams

    async def delete_many(self, ids: list[str]) -> int:
        return await self._tickets.delete_many(ids)

    async def reassign_many(self, ids: list[str], target_team_id: str) -> int:
        await _require_team(self._teams, target_team_id)
        return await self._tickets.move_many(ids, target_team_id)

    def delete_consequences(self, count: int) -> str:
        noun = "ticket" if count == 1 else "tickets"
        return (
            f"{count} {noun} will be permanently deleted, together with their "
            "messages, tags and metadata values."
        )
