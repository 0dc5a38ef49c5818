"""Abstract repository interface for users."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities import OperatorQuery, OperatorRecord, User, UserOverview, UserRole


class UserRepository(ABC):
    """Port: persistence operations for users."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None: ...

    @abstractmethod
    async def get_many(self, user_ids: list[str]) -> list[User]: ...

    @abstractmethod
    async def list_overview(self) -> list[UserOverview]:
        """Every user with their team name and number of created tickets."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User: ...

    @abstractmethod
    async def set_role(self, user_id: str, role: UserRole) -> User | None: ...

    @abstractmethod
    async def set_team(self, user_id: str, team_id: str | None, *, is_team_lead: bool = False) -> User | None: ...

    @abstractmethod
    async def set_team_lead(self, user_id: str, is_team_lead: bool) -> User | None: ...

    @abstractmethod
    async def delete_many(self, user_ids: list[str]) -> int:
        """Delete all listed users in one statement; dependants cascade."""
        ...

    @abstractmethod
    async def reassign_many(self, user_ids: list[str], team_id: str | None) -> int:
        """Move all listed users to ``team_id`` and clear their lead flag."""
        ...

    @abstractmethod
    async def search_operators(self, query: OperatorQuery) -> list[OperatorRecord]:
        """Users joined to team and skills, filtered exactly by the query."""
        ...
