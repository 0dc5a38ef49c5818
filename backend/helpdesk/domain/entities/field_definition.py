"""Domain entities for ticket metadata fields and their typed values."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from helpdesk.domain.exceptions import InvalidMetadataValueError


class ValueKind(str, Enum):
    """The closed set of value kinds a metadata field can hold."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"
    USER = "user"
    TICKET = "ticket"

    @classmethod
    def parse(cls, raw: "str | ValueKind") -> "ValueKind":
        """Resolve a kind from its canonical name or a legacy label."""
        if isinstance(raw, ValueKind):
            return raw
        key = str(raw).strip().lower()
        key = _KIND_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown value kind '{raw}' (expected one of: {allowed})") from None

    @property
    def column(self) -> str:
        """Name of the typed storage slot holding values of this kind."""
        return VALUE_KIND_COLUMNS[self]

    @property
    def is_temporal(self) -> bool:
        return self in (ValueKind.DATE, ValueKind.TIMESTAMP)


_KIND_ALIASES = {
    "natural number": "integer",
    "int": "integer",
    "fractional number": "float",
    "number": "float",
    "bool": "boolean",
    "datetime": "timestamp",
    "user-reference": "user",
    "ticket-reference": "ticket",
}

VALUE_KIND_COLUMNS: dict[ValueKind, str] = {
    ValueKind.TEXT: "field_value_text",
    ValueKind.INTEGER: "field_value_int",
    ValueKind.FLOAT: "field_value_float",
    ValueKind.BOOLEAN: "field_value_bool",
    ValueKind.DATE: "field_value_date",
    ValueKind.TIMESTAMP: "field_value_timestamp",
    ValueKind.USER: "field_value_user",
    ValueKind.TICKET: "field_value_ticket",
}


@dataclass
class FieldDefinition:
    """A user-defined metadata field attachable to tickets."""

    name: str
    value_kind: ValueKind
    description: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class MetadataPayload:
    """A metadata value tagged with its kind.

    Exactly one typed slot is meaningful for a given kind; ``to_columns``
    spreads the payload over all storage slots with the others left empty.
    """

    kind: ValueKind
    value: Any

    @classmethod
    def from_raw(cls, kind: ValueKind | str, raw: Any) -> "MetadataPayload":
        """Validate and coerce ``raw`` into a payload of ``kind``."""
        kind = ValueKind.parse(kind)
        if raw is None:
            raise InvalidMetadataValueError(kind.value, raw, "a value is required")
        coerce = _COERCERS[kind]
        try:
            value = coerce(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidMetadataValueError(kind.value, raw, str(exc)) from exc
        return cls(kind=kind, value=value)

    @classmethod
    def from_columns(cls, kind: ValueKind | str, columns: dict[str, Any]) -> "MetadataPayload":
        """Read the payload back from a row's storage slots."""
        kind = ValueKind.parse(kind)
        return cls(kind=kind, value=columns.get(kind.column))

    @property
    def column(self) -> str:
        return self.kind.column

    def to_columns(self) -> dict[str, Any]:
        slots = {column: None for column in VALUE_KIND_COLUMNS.values()}
        slots[self.column] = self.value
        return slots

    def to_json(self) -> Any:
        if isinstance(self.value, (date, datetime)):
            return self.value.isoformat()
        return self.value


@dataclass
class MetadataValue:
    """The value one field holds on one ticket."""

    ticket_id: str
    definition: FieldDefinition
    payload: MetadataPayload
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ---------------------------------------------------------------------------
# Coercion per kind
# ---------------------------------------------------------------------------


def _to_text(raw: Any) -> str:
    if not isinstance(raw, str):
        raise TypeError("expected a string")
    return raw


def _to_int(raw: Any) -> int:
    if isinstance(raw, bool):
        raise TypeError("booleans are not integers")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        return int(raw.strip())
    raise TypeError("expected an integer")


def _to_float(raw: Any) -> float:
    if isinstance(raw, bool):
        raise TypeError("booleans are not numbers")
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        return float(raw.strip())
    raise TypeError("expected a number")


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
        return raw.strip().lower() == "true"
    raise TypeError("expected true or false")


def _to_date(raw: Any) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if "T" in text or " " in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    raise TypeError("expected an ISO date")


def _to_timestamp(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, date):
        value = datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, str):
        value = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    else:
        raise TypeError("expected an ISO timestamp")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_reference(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise TypeError("expected a non-empty id")
    return raw.strip()


_COERCERS = {
    ValueKind.TEXT: _to_text,
    ValueKind.INTEGER: _to_int,
    ValueKind.FLOAT: _to_float,
    ValueKind.BOOLEAN: _to_bool,
    ValueKind.DATE: _to_date,
    ValueKind.TIMESTAMP: _to_timestamp,
    ValueKind.USER: _to_reference,
    ValueKind.TICKET: _to_reference,
}
