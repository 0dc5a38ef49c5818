"""Application service (use case) for tags and tag types."""

from helpdesk.application.interfaces import TagRepository, TicketRepository
from helpdesk.domain.entities import Tag, TagType
from helpdesk.domain.exceptions import DuplicateEntityError, EntityNotFoundError


class TagService:
    def __init__(self, tags: TagRepository, tickets: TicketRepository):
        self._tags = tags
        self._tickets = tickets

    async def list_types(self) -> list[TagType]:
        return await self._tags.list_types()

    async def create_type(self, name: str, description: str | None = None) -> TagType:
        name = name.strip()
        if await self._tags.get_type_by_name(name) is not None:
            raise DuplicateEntityError("TagType", "name", name)
        return await self._tags.create_type(TagType(name=name, description=description))

    async def delete_type(self, type_id: str) -> None:
        if not await self._tags.delete_type(type_id):
            raise EntityNotFoundError("TagType", type_id)

    async def list_tags(self, type_id: str | None = None) -> list[Tag]:
        return await self._tags.list_tags(type_id)

    async def create_tag(self, name: str, type_id: str, description: str | None = None) -> Tag:
        if await self._tags.get_type(type_id) is None:
            raise EntityNotFoundError("TagType", type_id)
        return await self._tags.create_tag(Tag(name=name.strip(), type_id=type_id, description=description))

    async def delete_tag(self, tag_id: str) -> None:
        if not await self._tags.delete_tag(tag_id):
            raise EntityNotFoundError("Tag", tag_id)

    async def attach(self, ticket_id: str, tag_id: str) -> None:
        if await self._tickets.get_by_id(ticket_id) is None:
            raise EntityNotFoundError("Ticket", ticket_id)
        if await self._tags.get_tag(tag_id) is None:
            raise EntityNotFoundError("Tag", tag_id)
        await self._tickets.add_tag(ticket_id, tag_id)

    async def detach(self, ticket_id: str, tag_id: str) -> None:
        if not await self._tickets.remove_tag(ticket_id, tag_id):
            raise EntityNotFoundError("TicketTag", f"{ticket_id}/{tag_id}")
