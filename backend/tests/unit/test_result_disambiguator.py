"""Unit tests for classifying command output."""

import json

from helpdesk.application.services import classify, parse_command_output, to_command_result
from helpdesk.domain.entities import CommandKind


def test_rows_without_flags_are_a_listing():
    result = to_command_result([{"id": "1", "name": "Ann"}, {"id": "2", "name": "Bob"}])

    assert result.kind is CommandKind.LISTING
    assert [p.name for p in result.subjects] == ["Ann", "Bob"]
    assert result.ambiguous is False


def test_any_delete_flag_makes_a_pending_delete():
    rows = [{"id": "1", "name": "Ann"}, {"id": "2", "name": "Bob", "delete": True}]

    assert classify(rows).is_delete is True
    assert to_command_result(rows).kind is CommandKind.DELETE_PENDING


def test_only_literal_true_counts_as_a_flag():
    rows = [{"id": "1", "name": "Ann", "delete": "true", "reassign": 1}]

    classification = classify(rows)

    assert classification.is_delete is False
    assert classification.is_reassign is False


def test_reassign_takes_target_team_from_first_flagged_row():
    rows = [
        {"id": "1", "name": "Ann"},
        {"id": "2", "name": "Bob", "reassign": True, "targetTeam": "Second Line"},
        {"id": "3", "name": "Cy", "reassign": True, "targetTeam": "Billing"},
    ]

    result = to_command_result(rows)

    assert result.kind is CommandKind.REASSIGN_PENDING
    assert result.target_team == "Second Line"
    assert result.subjects[1].target_team == "Second Line"


def test_conflicting_flags_fall_back_to_an_ambiguous_listing():
    rows = [
        {"id": "1", "name": "Ann", "delete": True},
        {"id": "2", "name": "Bob", "reassign": True, "targetTeam": "Ops"},
    ]

    result = to_command_result(rows)

    assert result.kind is CommandKind.LISTING
    assert result.ambiguous is True
    assert result.target_team is None


def test_plain_text_output_is_kept_raw():
    result = parse_command_output("There are no operators matching that request.")

    assert result.kind is CommandKind.LISTING
    assert result.subjects == []
    assert result.raw_text.startswith("There are no operators")


def test_json_that_is_not_a_list_of_objects_is_kept_raw():
    for output in ('{"name": "Ann"}', "[1, 2]", "42"):
        result = parse_command_output(output)
        assert result.kind is CommandKind.LISTING
        assert result.raw_text == output


def test_parse_command_output_classifies_rows():
    output = json.dumps([{"id": "1", "name": "Ann", "skills": ["Networking (Expert)"], "delete": True}])

    result = parse_command_output(output)

    assert result.kind is CommandKind.DELETE_PENDING
    assert result.subjects[0].skills == ["Networking (Expert)"]
    assert result.raw_text is None
