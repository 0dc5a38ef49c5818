"""Application service for the catalog of ticket metadata fields."""

import logging

from helpdesk.application.interfaces import FieldDefinitionRepository
from helpdesk.domain.entities import FieldDefinition, ValueKind
from helpdesk.domain.exceptions import EntityNotFoundError, FieldExistsError

logger = logging.getLogger(__name__)


class FieldCatalogService:
    """Creates, lists and deletes field definitions.

    A definition's value kind is fixed at creation; there is no update.
    Deleting a definition removes every value recorded for it.
    """

    def __init__(self, repository: FieldDefinitionRepository):
        self._repository = repository

    async def list(self) -> list[FieldDefinition]:
        return await self._repository.list_all()

    async def get(self, field_id: str) -> FieldDefinition:
        definition = await self._repository.get_by_id(field_id)
        if definition is None:
            raise EntityNotFoundError("FieldDefinition", field_id)
        return definition

    async def create(
        self,
        name: str,
        value_kind: ValueKind | str,
        description: str | None = None,
    ) -> FieldDefinition:
        name = name.strip()
        if not name:
            raise ValueError("Field name must not be empty")
        kind = ValueKind.parse(value_kind)
        if await self._repository.get_by_name(name) is not None:
            raise FieldExistsError(name)

        definition = FieldDefinition(
            name=name,
            value_kind=kind,
            description=(description or "").strip() or None,
        )
        created = await self._repository.create(definition)
        logger.info("Created metadata field '%s' (%s)", created.name, created.value_kind.value)
        return created

    async def delete(self, field_id: str) -> None:
        deleted = await self._repository.delete(field_id)
        if not deleted:
            raise EntityNotFoundError("FieldDefinition", field_id)
        logger.info("Deleted metadata field %s and its values", field_id)
