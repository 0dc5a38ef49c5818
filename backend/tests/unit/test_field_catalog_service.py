"""Unit tests for the FieldCatalogService."""

import pytest

from helpdesk.application.interfaces import FieldDefinitionRepository
from helpdesk.application.services import FieldCatalogService
from helpdesk.domain.entities import FieldDefinition, ValueKind
from helpdesk.domain.exceptions import EntityNotFoundError, FieldExistsError


class FakeFieldDefinitionRepository(FieldDefinitionRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._fields: dict[str, FieldDefinition] = {}

    async def list_all(self) -> list[FieldDefinition]:
        return sorted(self._fields.values(), key=lambda f: f.name)

    async def get_by_id(self, field_id: str) -> FieldDefinition | None:
        return self._fields.get(field_id)

    async def get_by_name(self, name: str) -> FieldDefinition | None:
        return next((f for f in self._fields.values() if f.name.lower() == name.lower()), None)

    async def create(self, definition: FieldDefinition) -> FieldDefinition:
        self._fields[definition.id] = definition
        return definition

    async def delete(self, field_id: str) -> bool:
        return self._fields.pop(field_id, None) is not None


@pytest.fixture
def service() -> FieldCatalogService:
    return FieldCatalogService(FakeFieldDefinitionRepository())


@pytest.mark.asyncio
async def test_create_field(service: FieldCatalogService):
    definition = await service.create("  Priority ", "natural number", "  How urgent  ")

    assert definition.name == "Priority"
    assert definition.value_kind is ValueKind.INTEGER
    assert definition.description == "How urgent"


@pytest.mark.asyncio
async def test_duplicate_name_is_rejected_case_insensitively(service: FieldCatalogService):
    await service.create("Priority", "integer")

    with pytest.raises(FieldExistsError):
        await service.create("priority", "text")


@pytest.mark.asyncio
async def test_unknown_kind_is_rejected(service: FieldCatalogService):
    with pytest.raises(ValueError):
        await service.create("Colour", "rgb")
    assert await service.list() == []


@pytest.mark.asyncio
async def test_list_is_ordered_by_name(service: FieldCatalogService):
    await service.create("Due", "timestamp")
    await service.create("Asset", "text")

    assert [f.name for f in await service.list()] == ["Asset", "Due"]


@pytest.mark.asyncio
async def test_delete_unknown_field(service: FieldCatalogService):
    with pytest.raises(EntityNotFoundError):
        await service.delete("missing")


@pytest.mark.asyncio
async def test_get_after_delete(service: FieldCatalogService):
    created = await service.create("Asset", "text")
    await service.delete(created.id)

    with pytest.raises(EntityNotFoundError):
        await service.get(created.id)
