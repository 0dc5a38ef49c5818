"""Concrete repositories for skills, proficiencies and the command vocabulary."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from helpdesk.application.interfaces import SkillRepository, VocabularyRepository
from helpdesk.domain.entities import AgentSkill, Proficiency, Skill, SkillAssignment
from helpdesk.infrastructure.database.models import (
    AgentSkillModel,
    ProficiencyModel,
    SkillModel,
    TeamModel,
)


class SQLAlchemySkillRepository(SkillRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_skills(self) -> list[Skill]:
        result = await self._session.execute(select(SkillModel).order_by(SkillModel.name))
        return [Skill(id=m.id, name=m.name) for m in result.scalars().all()]

    async def list_proficiencies(self) -> list[Proficiency]:
        result = await self._session.execute(select(ProficiencyModel).order_by(ProficiencyModel.name))
        return [Proficiency(id=m.id, name=m.name) for m in result.scalars().all()]

    async def get_skill(self, skill_id: str) -> Skill | None:
        model = await self._session.get(SkillModel, skill_id)
        return Skill(id=model.id, name=model.name) if model else None

    async def get_proficiency(self, proficiency_id: str) -> Proficiency | None:
        model = await self._session.get(ProficiencyModel, proficiency_id)
        return Proficiency(id=model.id, name=model.name) if model else None

    async def ensure_skill(self, name: str) -> Skill:
        stmt = select(SkillModel).where(SkillModel.name == name)
        model = (await self._session.execute(stmt)).scalars().first()
        if model is None:
            model = SkillModel(name=name)
            self._session.add(model)
            await self._session.flush()
        return Skill(id=model.id, name=model.name)

    async def ensure_proficiency(self, name: str) -> Proficiency:
        stmt = select(ProficiencyModel).where(ProficiencyModel.name == name)
        model = (await self._session.execute(stmt)).scalars().first()
        if model is None:
            model = ProficiencyModel(name=name)
            self._session.add(model)
            await self._session.flush()
        return Proficiency(id=model.id, name=model.name)

    async def assign(self, agent_skill: AgentSkill) -> AgentSkill:
        stmt = select(AgentSkillModel).where(
            AgentSkillModel.agent_id == agent_skill.agent_id,
            AgentSkillModel.skill_id == agent_skill.skill_id,
        )
        model = (await self._session.execute(stmt)).scalars().first()
        if model is None:
            model = AgentSkillModel(
                id=agent_skill.id,
                agent_id=agent_skill.agent_id,
                skill_id=agent_skill.skill_id,
                proficiency_id=agent_skill.proficiency_id,
            )
            self._session.add(model)
        else:
            model.proficiency_id = agent_skill.proficiency_id
        await self._session.flush()
        return AgentSkill(
            id=model.id,
            agent_id=model.agent_id,
            skill_id=model.skill_id,
            proficiency_id=model.proficiency_id,
        )

    async def list_for_agent(self, agent_id: str) -> list[SkillAssignment]:
        stmt = (
            select(AgentSkillModel)
            .where(AgentSkillModel.agent_id == agent_id)
            .options(selectinload(AgentSkillModel.skill), selectinload(AgentSkillModel.proficiency))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        assignments = [
            SkillAssignment(
                skill=link.skill.name,
                proficiency=link.proficiency.name if link.proficiency else None,
            )
            for link in result.scalars().all()
        ]
        return sorted(assignments, key=lambda a: a.skill)


class SQLAlchemyVocabularyRepository(VocabularyRepository):
    """Reads command vocabulary with one short-lived session per read.

    An AsyncSession must not be shared by concurrent operations, so each
    lookup opens its own session from the factory.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _names(self, column) -> list[str]:
        async with self._session_factory() as session:
            result = await session.execute(select(column).order_by(column))
            return list(result.scalars().all())

    async def team_names(self) -> list[str]:
        return await self._names(TeamModel.name)

    async def skill_names(self) -> list[str]:
        return await self._names(SkillModel.name)

    async def proficiency_names(self) -> list[str]:
        return await self._names(ProficiencyModel.name)
