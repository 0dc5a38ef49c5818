"""Concrete repository for teams backed by SQLAlchemy."""

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.application.interfaces import TeamRepository
from helpdesk.domain.entities import Team, User
from helpdesk.infrastructure.database.models import TeamModel, UserModel
from helpdesk.infrastructure.database.repositories.user_repository import user_to_entity


class SQLAlchemyTeamRepository(TeamRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: TeamModel) -> Team:
        return Team(
            id=model.id,
            name=model.name,
            description=model.description,
            created_at=model.created_at,
        )

    async def list_all(self) -> list[Team]:
        result = await self._session.execute(select(TeamModel).order_by(TeamModel.name))
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_by_id(self, team_id: str) -> Team | None:
        stmt = select(TeamModel).where(TeamModel.id == team_id)
        model = (await self._session.execute(stmt)).scalars().first()
        return self._to_entity(model) if model else None

    async def get_by_name(self, name: str) -> Team | None:
        stmt = select(TeamModel).where(func.lower(TeamModel.name) == name.strip().lower())
        model = (await self._session.execute(stmt)).scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, team: Team) -> Team:
        model = TeamModel(id=team.id, name=team.name, description=team.description)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, team_id: str) -> bool:
        # The foreign key only nulls team_id; the lead flag is cleared here.
        await self._session.execute(
            update(UserModel)
            .where(UserModel.team_id == team_id)
            .values(team_id=None, is_team_lead=False)
        )
        result = await self._session.execute(delete(TeamModel).where(TeamModel.id == team_id))
        return result.rowcount > 0

    async def list_members(self, team_id: str) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.team_id == team_id)
            .order_by(UserModel.is_team_lead.desc(), UserModel.full_name)
        )
        result = await self._session.execute(stmt)
        return [user_to_entity(row) for row in result.scalars().all()]
