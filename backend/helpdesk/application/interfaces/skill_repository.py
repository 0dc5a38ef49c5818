"""Abstract repository interfaces for skills and the command vocabulary."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities import AgentSkill, Proficiency, Skill, SkillAssignment


class SkillRepository(ABC):
    @abstractmethod
    async def list_skills(self) -> list[Skill]: ...

    @abstractmethod
    async def list_proficiencies(self) -> list[Proficiency]: ...

    @abstractmethod
    async def get_skill(self, skill_id: str) -> Skill | None: ...

    @abstractmethod
    async def get_proficiency(self, proficiency_id: str) -> Proficiency | None: ...

    @abstractmethod
    async def ensure_skill(self, name: str) -> Skill:
        """Return the named skill, creating it when absent."""
        ...

    @abstractmethod
    async def ensure_proficiency(self, name: str) -> Proficiency: ...

    @abstractmethod
    async def assign(self, agent_skill: AgentSkill) -> AgentSkill:
        """Set the proficiency an agent has in a skill (one row per agent and skill)."""
        ...

    @abstractmethod
    async def list_for_agent(self, agent_id: str) -> list[SkillAssignment]: ...


class VocabularyRepository(ABC):
    """Port: the names the command model may use as filter values.

    Each read must be independent so the three can run concurrently.
    """

    @abstractmethod
    async def team_names(self) -> list[str]: ...

    @abstractmethod
    async def skill_names(self) -> list[str]: ...

    @abstractmethod
    async def proficiency_names(self) -> list[str]: ...
