"""Concrete repository for tags and tag types backed by SQLAlchemy."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.application.interfaces import TagRepository
from helpdesk.domain.entities import Tag, TagType
from helpdesk.infrastructure.database.models import TagModel, TagTypeModel


class SQLAlchemyTagRepository(TagRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    @staticmethod
    def _type_to_entity(model: TagTypeModel) -> TagType:
        return TagType(id=model.id, name=model.name, description=model.description)

    @staticmethod
    def _tag_to_entity(model: TagModel) -> Tag:
        return Tag(id=model.id, name=model.name, type_id=model.type_id, description=model.description)

    async def list_types(self) -> list[TagType]:
        result = await self._session.execute(select(TagTypeModel).order_by(TagTypeModel.name))
        return [self._type_to_entity(row) for row in result.scalars().all()]

    async def get_type(self, type_id: str) -> TagType | None:
        model = await self._session.get(TagTypeModel, type_id)
        return self._type_to_entity(model) if model else None

    async def get_type_by_name(self, name: str) -> TagType | None:
        stmt = select(TagTypeModel).where(func.lower(TagTypeModel.name) == name.strip().lower())
        model = (await self._session.execute(stmt)).scalars().first()
        return self._type_to_entity(model) if model else None

    async def create_type(self, tag_type: TagType) -> TagType:
        model = TagTypeModel(id=tag_type.id, name=tag_type.name, description=tag_type.description)
        self._session.add(model)
        await self._session.flush()
        return self._type_to_entity(model)

    async def delete_type(self, type_id: str) -> bool:
        result = await self._session.execute(delete(TagTypeModel).where(TagTypeModel.id == type_id))
        return result.rowcount > 0

    async def list_tags(self, type_id: str | None = None) -> list[Tag]:
        stmt = select(TagModel).order_by(TagModel.name)
        if type_id is not None:
            stmt = stmt.where(TagModel.type_id == type_id)
        result = await self._session.execute(stmt)
        return [self._tag_to_entity(row) for row in result.scalars().all()]

    async def get_tag(self, tag_id: str) -> Tag | None:
        model = await self._session.get(TagModel, tag_id)
        return self._tag_to_entity(model) if model else None

    async def create_tag(self, tag: Tag) -> Tag:
        model = TagModel(id=tag.id, name=tag.name, type_id=tag.type_id, description=tag.description)
        self._session.add(model)
        await self._session.flush()
        return self._tag_to_entity(model)

    async def delete_tag(self, tag_id: str) -> bool:
        result = await self._session.execute(delete(TagModel).where(TagModel.id == tag_id))
        return result.rowcount > 0
