"""Application service (use case) for team administration."""

import logging

from helpdesk.application.interfaces import TeamRepository, UserRepository
from helpdesk.domain.entities import Team, User
from helpdesk.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    TeamLeadExistsError,
    TeamLeadMoveError,
)

logger = logging.getLogger(__name__)


class TeamService:
    """Team CRUD and membership. A team has at most one lead, and leads are
    never moved by bulk operations.
    """

    def __init__(self, teams: TeamRepository, users: UserRepository):
        self._teams = teams
        self._users = users

    async def list_teams(self) -> list[Team]:
        return await self._teams.list_all()

    async def get_team(self, team_id: str) -> Team:
        team = await self._teams.get_by_id(team_id)
        if team is None:
            raise EntityNotFoundError("Team", team_id)
        return team

    async def create_team(self, name: str, description: str | None = None) -> Team:
        name = name.strip()
        if not name:
            raise ValueError("Team name must not be empty")
        if await self._teams.get_by_name(name) is not None:
            raise DuplicateEntityError("Team", "name", name)
        return await self._teams.create(Team(name=name, description=description))

    async def delete_team(self, team_id: str) -> None:
        if not await self._teams.delete(team_id):
            raise EntityNotFoundError("Team", team_id)
        logger.info("Deleted team %s; members detached", team_id)

    async def list_members(self, team_id: str) -> list[User]:
        await self.get_team(team_id)
        return await self._teams.list_members(team_id)

    async def _require_member(self, team_id: str, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None or user.team_id != team_id:
            raise EntityNotFoundError("TeamMember", user_id)
        return user

    async def add_member(self, team_id: str, user_id: str) -> User:
        await self.get_team(team_id)
        user = await self._users.set_team(user_id, team_id, is_team_lead=False)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def remove_member(self, team_id: str, user_id: str) -> User:
        await self._require_member(team_id, user_id)
        return await self._users.set_team(user_id, None)

    async def set_team_lead(self, team_id: str, user_id: str, is_team_lead: bool) -> User:
        await self._require_member(team_id, user_id)
        if is_team_lead:
            current = [m for m in await self._teams.list_members(team_id) if m.is_team_lead]
            others = [m for m in current if m.id != user_id]
            if others:
                raise TeamLeadExistsError(team_id, others[0].full_name)
        return await self._users.set_team_lead(user_id, is_team_lead)

    async def _refuse_leads(self, team_id: str, user_ids: list[str]) -> None:
        members = await self._users.get_many(user_ids)
        missing = set(user_ids) - {m.id for m in members if m.team_id == team_id}
        if missing:
            raise EntityNotFoundError("TeamMember", sorted(missing)[0])
        leads = [m.id for m in members if m.is_team_lead]
        if leads:
            raise TeamLeadMoveError(leads)

    async def bulk_remove_members(self, team_id: str, user_ids: list[str]) -> int:
        await self._refuse_leads(team_id, user_ids)
        return await self._users.reassign_many(user_ids, None)

    async def bulk_reassign_members(self, team_id: str, user_ids: list[str], target_team_id: str) -> int:
        await self.get_team(target_team_id)
        await self._refuse_leads(team_id, user_ids)
        return await self._users.reassign_many(user_ids, target_team_id)
