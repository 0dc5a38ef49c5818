"""Metadata upsert semantics and metadata-driven ticket search."""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy import func, select

from helpdesk.application.services import FilterBuilder
from helpdesk.domain.entities import (
    FieldDefinition,
    MetadataPayload,
    Tag,
    TagType,
    Ticket,
    TicketQuery,
    ValueKind,
)
from helpdesk.infrastructure.database.models import TicketMetadataModel
from helpdesk.infrastructure.database.repositories import (
    SQLAlchemyFieldDefinitionRepository,
    SQLAlchemyMetadataValueRepository,
    SQLAlchemyTagRepository,
    SQLAlchemyTicketRepository,
)


@pytest.mark.asyncio
async def test_upserting_twice_keeps_one_row_with_the_latest_value(session):
    tickets = SQLAlchemyTicketRepository(session)
    fields = SQLAlchemyFieldDefinitionRepository(session)
    values = SQLAlchemyMetadataValueRepository(session)
    ticket = await tickets.create(Ticket(title="VPN drops every hour"))
    priority = await fields.create(FieldDefinition(name="Priority", value_kind=ValueKind.INTEGER))

    first = await values.upsert(ticket.id, priority, MetadataPayload.from_raw(ValueKind.INTEGER, 1))
    second = await values.upsert(ticket.id, priority, MetadataPayload.from_raw(ValueKind.INTEGER, "3"))
    await session.commit()

    rows = (
        await session.execute(
            select(func.count()).select_from(TicketMetadataModel).where(TicketMetadataModel.ticket_id == ticket.id)
        )
    ).scalar_one()
    assert rows == 1
    assert second.id == first.id
    assert second.payload.value == 3
    (stored,) = await values.list_for_ticket(ticket.id)
    assert stored.payload.value == 3
    assert stored.payload.kind is ValueKind.INTEGER


@pytest.mark.asyncio
async def test_temporal_values_round_trip(session):
    tickets = SQLAlchemyTicketRepository(session)
    fields = SQLAlchemyFieldDefinitionRepository(session)
    values = SQLAlchemyMetadataValueRepository(session)
    ticket = await tickets.create(Ticket(title="Renew certificate"))
    due = await fields.create(FieldDefinition(name="Due", value_kind=ValueKind.DATE))
    seen = await fields.create(FieldDefinition(name="Last seen", value_kind=ValueKind.TIMESTAMP))

    await values.upsert(ticket.id, due, MetadataPayload.from_raw(ValueKind.DATE, "2024-06-30"))
    await values.upsert(ticket.id, seen, MetadataPayload.from_raw(ValueKind.TIMESTAMP, "2024-06-01T10:00:00Z"))
    await session.commit()

    by_name = {v.definition.name: v.payload.value for v in await values.list_for_ticket(ticket.id)}
    assert by_name["Due"] == date(2024, 6, 30)
    assert by_name["Last seen"] == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_search_matches_all_predicates_and_tags(session):
    tickets = SQLAlchemyTicketRepository(session)
    fields = SQLAlchemyFieldDefinitionRepository(session)
    values = SQLAlchemyMetadataValueRepository(session)
    tags = SQLAlchemyTagRepository(session)

    priority = await fields.create(FieldDefinition(name="Priority", value_kind=ValueKind.INTEGER))
    reported = await fields.create(FieldDefinition(name="Reported", value_kind=ValueKind.TIMESTAMP))
    category = await tags.create_type(TagType(name="Category"))
    hardware = await tags.create_tag(Tag(name="Hardware", type_id=category.id))

    late_evening = await tickets.create(Ticket(title="Printer jam"))
    next_morning = await tickets.create(Ticket(title="Monitor flicker"))
    low_priority = await tickets.create(Ticket(title="Mouse squeaks"))
    for ticket, prio, when in (
        (late_evening, 1, "2024-05-02T23:30:00Z"),
        (next_morning, 1, "2024-05-03T00:15:00Z"),
        (low_priority, 5, "2024-05-02T09:00:00Z"),
    ):
        await values.upsert(ticket.id, priority, MetadataPayload.from_raw(ValueKind.INTEGER, prio))
        await values.upsert(ticket.id, reported, MetadataPayload.from_raw(ValueKind.TIMESTAMP, when))
        await tickets.add_tag(ticket.id, hardware.id)
    await session.commit()

    builder = FilterBuilder()
    builder.set_predicate(priority, 1)
    builder.set_predicate(reported, "2024-05-02")
    builder.add_tag(hardware.id)

    found = await tickets.search(builder.to_ticket_query())
    assert [t.id for t in found] == [late_evening.id]

    builder.remove_predicate(reported.id)
    found = await tickets.search(builder.to_ticket_query())
    assert {t.id for t in found} == {late_evening.id, next_morning.id}

    await tickets.remove_tag(next_morning.id, hardware.id)
    found = await tickets.search(builder.to_ticket_query())
    assert [t.id for t in found] == [late_evening.id]

    builder.disable()
    assert len(await tickets.search(builder.to_ticket_query())) == 3


@pytest.mark.asyncio
async def test_empty_query_lists_newest_first_with_paging(session):
    tickets = SQLAlchemyTicketRepository(session)
    created = []
    for i in range(3):
        created.append(
            await tickets.create(Ticket(title=f"T{i}", created_at=datetime(2024, 1, i + 1, tzinfo=timezone.utc)))
        )
    await session.commit()

    page = await tickets.search(TicketQuery(), skip=1, limit=1)

    assert [t.title for t in page] == ["T1"]


@pytest.mark.asyncio
async def test_detail_includes_tags_and_metadata(session):
    tickets = SQLAlchemyTicketRepository(session)
    fields = SQLAlchemyFieldDefinitionRepository(session)
    values = SQLAlchemyMetadataValueRepository(session)
    tags = SQLAlchemyTagRepository(session)

    ticket = await tickets.create(Ticket(title="Keyboard missing keys"))
    asset = await fields.create(FieldDefinition(name="Asset", value_kind=ValueKind.TEXT))
    kind = await tags.create_type(TagType(name="Kind"))
    tag = await tags.create_tag(Tag(name="Hardware", type_id=kind.id))
    await values.upsert(ticket.id, asset, MetadataPayload.from_raw(ValueKind.TEXT, "KB-7"))
    await tickets.add_tag(ticket.id, tag.id)
    await tickets.add_tag(ticket.id, tag.id)
    await session.commit()

    detail = await tickets.get_detail(ticket.id)

    assert [t.name for t in detail.tags] == ["Hardware"]
    assert [(v.definition.name, v.payload.value) for v in detail.metadata] == [("Asset", "KB-7")]
