"""Unit tests for metadata value kinds and typed payloads."""

from datetime import date, datetime, timedelta, timezone

import pytest

from helpdesk.domain.entities import VALUE_KIND_COLUMNS, MetadataPayload, ValueKind
from helpdesk.domain.exceptions import InvalidMetadataValueError


def test_parse_accepts_canonical_names_and_legacy_labels():
    assert ValueKind.parse("integer") is ValueKind.INTEGER
    assert ValueKind.parse("Natural Number") is ValueKind.INTEGER
    assert ValueKind.parse("fractional number") is ValueKind.FLOAT
    assert ValueKind.parse(ValueKind.DATE) is ValueKind.DATE


def test_parse_rejects_unknown_kind():
    with pytest.raises(ValueError, match="Unknown value kind"):
        ValueKind.parse("colour")


def test_every_kind_has_its_own_column():
    assert set(VALUE_KIND_COLUMNS) == set(ValueKind)
    assert len(set(VALUE_KIND_COLUMNS.values())) == len(ValueKind)


def test_to_columns_fills_exactly_one_slot():
    payload = MetadataPayload.from_raw(ValueKind.INTEGER, "42")

    columns = payload.to_columns()

    assert columns["field_value_int"] == 42
    assert [name for name, value in columns.items() if value is not None] == ["field_value_int"]


def test_from_columns_reads_the_kind_slot():
    columns = {"field_value_text": "ignored", "field_value_bool": True}

    payload = MetadataPayload.from_columns("boolean", columns)

    assert payload.kind is ValueKind.BOOLEAN
    assert payload.value is True


@pytest.mark.parametrize(
    ("kind", "raw"),
    [
        (ValueKind.INTEGER, "4.5"),
        (ValueKind.INTEGER, True),
        (ValueKind.FLOAT, "abc"),
        (ValueKind.BOOLEAN, "yes"),
        (ValueKind.DATE, "31/12/2024"),
        (ValueKind.TEXT, 12),
        (ValueKind.USER, "   "),
    ],
)
def test_from_raw_rejects_values_of_the_wrong_kind(kind, raw):
    with pytest.raises(InvalidMetadataValueError):
        MetadataPayload.from_raw(kind, raw)


def test_from_raw_requires_a_value():
    with pytest.raises(InvalidMetadataValueError, match="a value is required"):
        MetadataPayload.from_raw(ValueKind.TEXT, None)


def test_timestamp_is_normalised_to_utc():
    payload = MetadataPayload.from_raw(ValueKind.TIMESTAMP, "2024-03-01T23:30:00+02:00")

    assert payload.value == datetime(2024, 3, 1, 21, 30, tzinfo=timezone.utc)
    assert payload.value.utcoffset() == timedelta(0)


def test_naive_timestamp_is_taken_as_utc():
    payload = MetadataPayload.from_raw(ValueKind.TIMESTAMP, "2024-03-01T08:00:00")

    assert payload.value.tzinfo is timezone.utc


def test_date_accepts_a_datetime_string():
    payload = MetadataPayload.from_raw(ValueKind.DATE, "2024-03-01T08:00:00")

    assert payload.value == date(2024, 3, 1)
    assert payload.to_json() == "2024-03-01"
