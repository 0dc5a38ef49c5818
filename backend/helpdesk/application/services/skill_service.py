"""Application service for agent skills and proficiency levels."""

import logging

from helpdesk.application.interfaces import SkillRepository, UserRepository
from helpdesk.domain.entities import AgentSkill, Proficiency, Skill, SkillAssignment
from helpdesk.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SKILLS = ("Billing", "Hardware", "Networking", "Software")
DEFAULT_PROFICIENCIES = ("Beginner", "Intermediate", "Advanced", "Expert")


class SkillService:
    def __init__(self, skills: SkillRepository, users: UserRepository):
        self._skills = skills
        self._users = users

    async def list_skills(self) -> list[Skill]:
        return await self._skills.list_skills()

    async def list_proficiencies(self) -> list[Proficiency]:
        return await self._skills.list_proficiencies()

    async def list_for_agent(self, user_id: str) -> list[SkillAssignment]:
        if await self._users.get_by_id(user_id) is None:
            raise EntityNotFoundError("User", user_id)
        return await self._skills.list_for_agent(user_id)

    async def assign(self, user_id: str, skill_id: str, proficiency_id: str | None = None) -> list[SkillAssignment]:
        if await self._users.get_by_id(user_id) is None:
            raise EntityNotFoundError("User", user_id)
        if await self._skills.get_skill(skill_id) is None:
            raise EntityNotFoundError("Skill", skill_id)
        if proficiency_id and await self._skills.get_proficiency(proficiency_id) is None:
            raise EntityNotFoundError("Proficiency", proficiency_id)
        await self._skills.assign(
            AgentSkill(agent_id=user_id, skill_id=skill_id, proficiency_id=proficiency_id)
        )
        return await self._skills.list_for_agent(user_id)

    async def seed_defaults(self) -> None:
        """Make sure the default skills and proficiency levels exist."""
        for name in DEFAULT_SKILLS:
            await self._skills.ensure_skill(name)
        for name in DEFAULT_PROFICIENCIES:
            await self._skills.ensure_proficiency(name)
        logger.info(
            "Skill vocabulary ready: %d skills, %d proficiencies",
            len(DEFAULT_SKILLS),
            len(DEFAULT_PROFICIENCIES),
        )
