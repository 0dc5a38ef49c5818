"""Domain entities for metadata-driven ticket filtering."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .field_definition import FieldDefinition, ValueKind


class PredicateOperator(str, Enum):
    EQ = "eq"
    DATE_EQ = "date_eq"

    @classmethod
    def for_kind(cls, kind: ValueKind) -> "PredicateOperator":
        return cls.DATE_EQ if kind.is_temporal else cls.EQ


@dataclass
class FilterPredicate:
    """One active filter: a field definition and the value to match."""

    definition: FieldDefinition
    value: Any

    @property
    def operator(self) -> PredicateOperator:
        return PredicateOperator.for_kind(self.definition.value_kind)


@dataclass(frozen=True)
class QueryPredicate:
    """A filter predicate in the structured form the ticket search consumes."""

    field_id: str
    value_kind: ValueKind
    operator: PredicateOperator
    value: Any

    @property
    def column(self) -> str:
        return self.value_kind.column


@dataclass
class TicketQuery:
    predicates: list[QueryPredicate] = field(default_factory=list)
    tag_ids: list[str] = field(default_factory=list)
    team_id: str | None = None
