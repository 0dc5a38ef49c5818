"""Unit tests for the FilterBuilder."""

from datetime import date

import pytest

from helpdesk.application.services import FilterBuilder
from helpdesk.domain.entities import FieldDefinition, PredicateOperator, ValueKind
from helpdesk.domain.exceptions import InvalidMetadataValueError


@pytest.fixture
def priority() -> FieldDefinition:
    return FieldDefinition(name="Priority", value_kind=ValueKind.INTEGER)


@pytest.fixture
def due() -> FieldDefinition:
    return FieldDefinition(name="Due", value_kind=ValueKind.TIMESTAMP)


def test_set_predicate_replaces_previous_value(priority):
    builder = FilterBuilder()
    builder.set_predicate(priority, 1)
    builder.set_predicate(priority, "3")

    query = builder.to_query()

    assert len(query) == 1
    assert query[0].field_id == priority.id
    assert query[0].operator is PredicateOperator.EQ
    assert query[0].value == 3
    assert query[0].column == "field_value_int"


def test_none_value_is_ignored(priority):
    builder = FilterBuilder()
    builder.set_predicate(priority, None)

    assert builder.predicates == []


def test_invalid_value_is_rejected_and_not_stored(priority):
    builder = FilterBuilder()

    with pytest.raises(InvalidMetadataValueError):
        builder.set_predicate(priority, "high")
    assert builder.predicates == []


def test_timestamp_predicate_compares_by_day(due):
    builder = FilterBuilder()
    builder.set_predicate(due, "2024-05-02T22:15:00Z")

    (predicate,) = builder.to_query()

    assert predicate.operator is PredicateOperator.DATE_EQ
    assert predicate.value == date(2024, 5, 2)


def test_disabled_builder_keeps_predicates_but_emits_nothing(priority):
    builder = FilterBuilder()
    builder.set_predicate(priority, 2)
    builder.set_tags(["tag-1"])

    builder.disable()
    ticket_query = builder.to_ticket_query(team_id="team-1")

    assert ticket_query.predicates == []
    assert ticket_query.tag_ids == []
    assert ticket_query.team_id == "team-1"
    assert len(builder.predicates) == 1

    builder.enable()
    assert len(builder.to_query()) == 1
    assert builder.to_ticket_query().tag_ids == ["tag-1"]


def test_remove_predicate_and_clear_all(priority, due):
    builder = FilterBuilder()
    builder.set_predicate(priority, 1)
    builder.set_predicate(due, "2024-01-01")
    builder.add_tag("a")

    builder.remove_predicate(priority.id)
    assert [p.definition.id for p in builder.predicates] == [due.id]

    builder.clear_all()
    assert builder.predicates == []
    assert builder.tag_ids == []


def test_tags_are_deduplicated_in_order():
    builder = FilterBuilder()
    builder.set_tags(["b", "a", "b"])
    builder.add_tag("a")
    builder.add_tag("c")
    builder.remove_tag("b")

    assert builder.tag_ids == ["a", "c"]
