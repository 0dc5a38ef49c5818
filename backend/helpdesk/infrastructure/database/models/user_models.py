"""SQLAlchemy ORM models for users, teams and agent skills."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.infrastructure.database.base import Base


def _generate_uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TeamModel(Base):
    """ORM model: maps to the 'teams' table."""

    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    members: Mapped[list["UserModel"]] = relationship(back_populates="team", passive_deletes=True)


class UserModel(Base):
    """ORM model: maps to the 'users' table.

    Deleting a user cascades (at the database level) to the tickets they
    created, the messages they sent, metadata values pointing at them and
    their skill associations.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="customer")
    team_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    is_team_lead: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False,
    )

    team: Mapped[TeamModel | None] = relationship(back_populates="members")
    skills: Mapped[list["AgentSkillModel"]] = relationship(
        back_populates="agent", passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id='{self.id}', full_name='{self.full_name}', role='{self.role}')>"


class SkillModel(Base):
    __tablename__ = "skills"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class ProficiencyModel(Base):
    __tablename__ = "proficiencies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class AgentSkillModel(Base):
    """ORM model: maps to the 'agent_skills' association table."""

    __tablename__ = "agent_skills"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    agent_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    skill_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("skills.id", ondelete="CASCADE"), nullable=False,
    )
    proficiency_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("proficiencies.id", ondelete="SET NULL"), nullable=True,
    )

    agent: Mapped[UserModel] = relationship(back_populates="skills")
    skill: Mapped[SkillModel] = relationship()
    proficiency: Mapped[ProficiencyModel | None] = relationship()

    __table_args__ = (
        UniqueConstraint("agent_id", "skill_id", name="uq_agent_skills_agent_skill"),
    )
