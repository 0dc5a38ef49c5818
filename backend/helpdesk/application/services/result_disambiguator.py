"""Classify command output rows as a plain listing or a pending action."""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from helpdesk.domain.entities import Classification, CommandKind, CommandResult, Person

logger = logging.getLogger(__name__)


def classify(rows: Sequence[Mapping[str, Any]]) -> Classification:
    """A result is a delete (reassign) if any row carries ``delete`` (``reassign``) set to true."""
    return Classification(
        is_delete=any(row.get("delete") is True for row in rows),
        is_reassign=any(row.get("reassign") is True for row in rows),
    )


def to_command_result(rows: Sequence[Mapping[str, Any]]) -> CommandResult:
    """Turn parsed rows into a CommandResult.

    Rows flagged for both delete and reassign are contradictory; the result
    is then shown as a listing marked ``ambiguous`` and no action is routed.
    """
    classification = classify(rows)
    subjects = [Person.from_row(dict(row)) for row in rows]

    if classification.is_delete and classification.is_reassign:
        logger.warning("Command result flags both delete and reassign; treating it as a listing")
        return CommandResult(kind=CommandKind.LISTING, subjects=subjects, ambiguous=True)

    if classification.is_delete:
        return CommandResult(kind=CommandKind.DELETE_PENDING, subjects=subjects)

    if classification.is_reassign:
        target = next(
            (row.get("targetTeam") for row in rows if row.get("reassign") is True and row.get("targetTeam")),
            None,
        )
        return CommandResult(kind=CommandKind.REASSIGN_PENDING, subjects=subjects, target_team=target)

    return CommandResult(kind=CommandKind.LISTING, subjects=subjects)


def parse_command_output(output: str) -> CommandResult:
    """Parse dispatcher output text; anything but a JSON array of objects is raw text."""
    try:
        data = json.loads(output)
    except (TypeError, ValueError):
        return CommandResult(kind=CommandKind.LISTING, raw_text=output)

    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        return CommandResult(kind=CommandKind.LISTING, raw_text=output)
    return to_command_result(data)
