"""Application service (use case) for user administration."""

from helpdesk.application.interfaces import TeamRepository, UserRepository
from helpdesk.application.services.bulk_executors import UserBulkExecutor
from helpdesk.application.services.bulk_mutation_controller import (
    BulkMutationController,
    MutationOutcome,
)
from helpdesk.domain.entities import User, UserOverview, UserRole
from helpdesk.domain.exceptions import EntityNotFoundError


class UserService:
    def __init__(self, users: UserRepository, teams: TeamRepository):
        self._users = users
        self._teams = teams

    async def list_users(self) -> list[UserOverview]:
        return await self._users.list_overview()

    async def get_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def create_user(self, full_name: str | None, role: UserRole | str = UserRole.CUSTOMER) -> User:
        return await self._users.create(User(full_name=full_name, role=UserRole(role)))

    async def change_role(self, user_id: str, role: UserRole | str) -> User:
        user = await self._users.set_role(user_id, UserRole(role))
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def resolve_team_id(self, team_name: str) -> str | None:
        team = await self._teams.get_by_name(team_name)
        return team.id if team else None

    def bulk_controller(self) -> BulkMutationController:
        return BulkMutationController(UserBulkExecutor(self._users, self._teams))

    async def bulk_delete(self, user_ids: list[str]) -> MutationOutcome:
        """Delete users; their tickets, messages, references and skills go with them."""
        controller = self.bulk_controller()
        controller.select_all(user_ids)
        controller.request_delete()
        return await controller.confirm()

    async def bulk_reassign(self, user_ids: list[str], team_id: str) -> MutationOutcome:
        """Move users to ``team_id``; moved users are no longer team leads."""
        controller = self.bulk_controller()
        controller.select_all(user_ids)
        controller.request_reassign(team_id)
        return await controller.confirm()
