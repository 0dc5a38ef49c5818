"""Application service for typed metadata values on tickets."""

from typing import Any

from helpdesk.application.interfaces import (
    FieldDefinitionRepository,
    MetadataValueRepository,
    TicketRepository,
    UserRepository,
)
from helpdesk.domain.entities import MetadataPayload, MetadataValue, ValueKind
from helpdesk.domain.exceptions import EntityNotFoundError


class TicketMetadataService:
    def __init__(
        self,
        values: MetadataValueRepository,
        fields: FieldDefinitionRepository,
        tickets: TicketRepository,
        users: UserRepository,
    ):
        self._values = values
        self._fields = fields
        self._tickets = tickets
        self._users = users

    async def _require_ticket(self, ticket_id: str) -> None:
        if await self._tickets.get_by_id(ticket_id) is None:
            raise EntityNotFoundError("Ticket", ticket_id)

    async def list_for_ticket(self, ticket_id: str) -> list[MetadataValue]:
        await self._require_ticket(ticket_id)
        return await self._values.list_for_ticket(ticket_id)

    async def set_value(self, ticket_id: str, field_id: str, raw_value: Any) -> MetadataValue:
        """Validate ``raw_value`` against the field's kind and upsert it.

        Raises:
            EntityNotFoundError: Unknown ticket, field, or referenced record.
            InvalidMetadataValueError: The value does not fit the kind.
        """
        await self._require_ticket(ticket_id)
        definition = await self._fields.get_by_id(field_id)
        if definition is None:
            raise EntityNotFoundError("FieldDefinition", field_id)

        payload = MetadataPayload.from_raw(definition.value_kind, raw_value)
        if payload.kind is ValueKind.USER:
            if await self._users.get_by_id(payload.value) is None:
                raise EntityNotFoundError("User", payload.value)
        elif payload.kind is ValueKind.TICKET:
            if await self._tickets.get_by_id(payload.value) is None:
                raise EntityNotFoundError("Ticket", payload.value)

        return await self._values.upsert(ticket_id, definition, payload)

    async def remove_value(self, ticket_id: str, field_id: str) -> None:
        removed = await self._values.delete(ticket_id, field_id)
        if not removed:
            raise EntityNotFoundError("MetadataValue", f"{ticket_id}/{field_id}")
