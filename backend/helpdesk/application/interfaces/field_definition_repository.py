"""Abstract repository interfaces for metadata field definitions and values."""

from abc import ABC, abstractmethod

from helpdesk.domain.entities import FieldDefinition, MetadataPayload, MetadataValue


class FieldDefinitionRepository(ABC):
    """Port: persistence for the field catalog."""

    @abstractmethod
    async def list_all(self) -> list[FieldDefinition]:
        """Return every field definition ordered by name."""
        ...

    @abstractmethod
    async def get_by_id(self, field_id: str) -> FieldDefinition | None: ...

    @abstractmethod
    async def get_by_name(self, name: str) -> FieldDefinition | None:
        """Case-insensitive lookup by name."""
        ...

    @abstractmethod
    async def create(self, definition: FieldDefinition) -> FieldDefinition: ...

    @abstractmethod
    async def delete(self, field_id: str) -> bool:
        """Delete a definition and, through the foreign key, all of its values.

        Returns:
            True if a row was deleted.
        """
        ...


class MetadataValueRepository(ABC):
    """Port: persistence for typed metadata values on tickets."""

    @abstractmethod
    async def upsert(self, ticket_id: str, definition: FieldDefinition, payload: MetadataPayload) -> MetadataValue:
        """Insert or replace the value keyed by (ticket_id, field id)."""
        ...

    @abstractmethod
    async def delete(self, ticket_id: str, field_id: str) -> bool: ...

    @abstractmethod
    async def list_for_ticket(self, ticket_id: str) -> list[MetadataValue]: ...

    @abstractmethod
    async def count_for_field(self, field_id: str) -> int: ...
