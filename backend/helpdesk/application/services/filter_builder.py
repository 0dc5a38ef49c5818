"""Dynamic ticket filter built from metadata field predicates.

A FilterBuilder is an explicit state object owned by one screen (or one
request); nothing about it is global.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from helpdesk.domain.entities import (
    FieldDefinition,
    FilterPredicate,
    MetadataPayload,
    PredicateOperator,
    QueryPredicate,
    TicketQuery,
)


class FilterBuilder:
    """Holds at most one predicate per field plus a set of required tags.

    Predicates survive ``disable()``; ``to_query()`` simply returns nothing
    while the builder is disabled.
    """

    def __init__(self) -> None:
        self._predicates: dict[str, FilterPredicate] = {}
        self._tag_ids: list[str] = []
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def predicates(self) -> list[FilterPredicate]:
        return list(self._predicates.values())

    @property
    def tag_ids(self) -> list[str]:
        return list(self._tag_ids)

    def set_predicate(self, definition: FieldDefinition, value: Any) -> None:
        """Add or replace the predicate for ``definition``.

        A ``None`` value is ignored. The value is validated against the
        field's kind before it is stored.
        """
        if value is None:
            return
        payload = MetadataPayload.from_raw(definition.value_kind, value)
        self._predicates[definition.id] = FilterPredicate(definition=definition, value=payload.value)

    def remove_predicate(self, field_id: str) -> None:
        self._predicates.pop(field_id, None)

    def clear_all(self) -> None:
        self._predicates.clear()
        self._tag_ids.clear()

    def set_tags(self, tag_ids: Iterable[str]) -> None:
        self._tag_ids = list(dict.fromkeys(tag_ids))

    def add_tag(self, tag_id: str) -> None:
        if tag_id not in self._tag_ids:
            self._tag_ids.append(tag_id)

    def remove_tag(self, tag_id: str) -> None:
        if tag_id in self._tag_ids:
            self._tag_ids.remove(tag_id)

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def to_query(self) -> list[QueryPredicate]:
        """Structured predicates in insertion order; empty while disabled."""
        if not self._enabled:
            return []
        query = []
        for predicate in self._predicates.values():
            operator = predicate.operator
            value = predicate.value
            if operator is PredicateOperator.DATE_EQ and isinstance(value, datetime):
                value = value.date()
            query.append(
                QueryPredicate(
                    field_id=predicate.definition.id,
                    value_kind=predicate.definition.value_kind,
                    operator=operator,
                    value=value,
                )
            )
        return query

    def to_ticket_query(self, team_id: str | None = None) -> TicketQuery:
        """The full ticket search: metadata predicates and required tags."""
        return TicketQuery(
            predicates=self.to_query(),
            tag_ids=self.tag_ids if self._enabled else [],
            team_id=team_id,
        )
