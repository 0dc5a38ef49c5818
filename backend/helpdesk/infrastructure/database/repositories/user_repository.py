"""Concrete repository for users backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from helpdesk.application.interfaces import UserRepository
from helpdesk.domain.entities import (
    OperatorQuery,
    OperatorRecord,
    SkillAssignment,
    User,
    UserOverview,
    UserRole,
)
from helpdesk.infrastructure.database.models import (
    AgentSkillModel,
    ProficiencyModel,
    SkillModel,
    TeamModel,
    TicketModel,
    UserModel,
)


def user_to_entity(model: UserModel) -> User:
    """Map ORM model → domain entity."""
    return User(
        id=model.id,
        full_name=model.full_name,
        role=UserRole(model.role),
        team_id=model.team_id,
        is_team_lead=model.is_team_lead,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _load(self, user_id: str) -> UserModel | None:
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalars().first()

    async def get_by_id(self, user_id: str) -> User | None:
        model = await self._load(user_id)
        return user_to_entity(model) if model else None

    async def get_many(self, user_ids: list[str]) -> list[User]:
        if not user_ids:
            return []
        stmt = (
            select(UserModel)
            .where(UserModel.id.in_(user_ids))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [user_to_entity(row) for row in result.scalars().all()]

    async def list_overview(self) -> list[UserOverview]:
        ticket_counts = (
            select(TicketModel.creator_id, func.count(TicketModel.id).label("ticket_count"))
            .group_by(TicketModel.creator_id)
            .subquery()
        )
        stmt = (
            select(UserModel, TeamModel.name, func.coalesce(ticket_counts.c.ticket_count, 0))
            .outerjoin(TeamModel, UserModel.team_id == TeamModel.id)
            .outerjoin(ticket_counts, ticket_counts.c.creator_id == UserModel.id)
            .order_by(UserModel.full_name)
        )
        result = await self._session.execute(stmt)
        return [
            UserOverview(user=user_to_entity(user), team_name=team_name, created_ticket_count=count)
            for user, team_name, count in result.all()
        ]

    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            full_name=user.full_name,
            role=user.role.value,
            team_id=user.team_id,
            is_team_lead=user.is_team_lead,
        )
        self._session.add(model)
        await self._session.flush()
        return user_to_entity(model)

    async def set_role(self, user_id: str, role: UserRole) -> User | None:
        model = await self._load(user_id)
        if model is None:
            return None
        model.role = role.value
        await self._session.flush()
        return user_to_entity(model)

    async def set_team(self, user_id: str, team_id: str | None, *, is_team_lead: bool = False) -> User | None:
        model = await self._load(user_id)
        if model is None:
            return None
        model.team_id = team_id
        model.is_team_lead = is_team_lead if team_id else False
        await self._session.flush()
        return user_to_entity(model)

    async def set_team_lead(self, user_id: str, is_team_lead: bool) -> User | None:
        model = await self._load(user_id)
        if model is None:
            return None
        model.is_team_lead = is_team_lead
        await self._session.flush()
        return user_to_entity(model)

    async def delete_many(self, user_ids: list[str]) -> int:
        if not user_ids:
            return 0
        result = await self._session.execute(delete(UserModel).where(UserModel.id.in_(user_ids)))
        return result.rowcount

    async def reassign_many(self, user_ids: list[str], team_id: str | None) -> int:
        if not user_ids:
            return 0
        result = await self._session.execute(
            update(UserModel)
            .where(UserModel.id.in_(user_ids))
            .values(team_id=team_id, is_team_lead=False, updated_at=datetime.now(timezone.utc))
        )
        return result.rowcount

    async def search_operators(self, query: OperatorQuery) -> list[OperatorRecord]:
        stmt = select(UserModel).options(
            selectinload(UserModel.team),
            selectinload(UserModel.skills).options(
                selectinload(AgentSkillModel.skill),
                selectinload(AgentSkillModel.proficiency),
            ),
        )
        if query.team_name:
            stmt = stmt.join(TeamModel, UserModel.team_id == TeamModel.id).where(
                TeamModel.name == query.team_name
            )
        if query.is_team_lead is not None:
            stmt = stmt.where(UserModel.is_team_lead == query.is_team_lead)
        if query.skill or query.proficiency:
            # Skill and proficiency must hold on the same association row.
            match = select(AgentSkillModel.id).where(AgentSkillModel.agent_id == UserModel.id)
            if query.skill:
                match = match.join(SkillModel, AgentSkillModel.skill_id == SkillModel.id).where(
                    SkillModel.name == query.skill
                )
            if query.proficiency:
                match = match.join(
                    ProficiencyModel, AgentSkillModel.proficiency_id == ProficiencyModel.id
                ).where(ProficiencyModel.name == query.proficiency)
            stmt = stmt.where(match.exists())
        stmt = stmt.order_by(UserModel.full_name, UserModel.id)

        result = await self._session.execute(stmt)
        records = []
        for model in result.scalars().all():
            skills = sorted(
                (
                    SkillAssignment(
                        skill=link.skill.name,
                        proficiency=link.proficiency.name if link.proficiency else None,
                    )
                    for link in model.skills
                ),
                key=lambda s: s.skill,
            )
            records.append(
                OperatorRecord(
                    id=model.id,
                    name=model.full_name,
                    role=UserRole(model.role),
                    is_team_lead=model.is_team_lead,
                    team=model.team.name if model.team else None,
                    skills=skills,
                )
            )
        return records
