"""Abstract repository interface for teams."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities import Team, User


class TeamRepository(ABC):
    @abstractmethod
    async def list_all(self) -> list[Team]: ...

    @abstractmethod
    async def get_by_id(self, team_id: str) -> Team | None: ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Team | None:
        """Case-insensitive lookup by name."""
        ...

    @abstractmethod
    async def create(self, team: Team) -> Team: ...

    @abstractmethod
    async def delete(self, team_id: str) -> bool:
        """Delete a team; members are detached and lose their lead flag."""
        ...

    @abstractmethod
    async def list_members(self, team_id: str) -> list[User]: ...
