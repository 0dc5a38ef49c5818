"""Domain entities for row change notifications."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class RowChange:
    table: str
    event: str  # "INSERT" | "UPDATE" | "DELETE"
    row: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class RowPredicate:
    """Equality filter on one column, e.g. ``ticket_id = <id>``."""

    column: str
    value: Any

    def matches(self, row: dict[str, Any]) -> bool:
        return row.get(self.column) == self.value
