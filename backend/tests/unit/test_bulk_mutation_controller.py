"""Unit tests for the BulkMutationController."""

import asyncio

import pytest

from helpdesk.application.interfaces import BulkMutationExecutor
from helpdesk.application.services import BulkMutationController, PendingAction
from helpdesk.domain.exceptions import NoSelectionError


# ── Fakes ──


class FakeExecutor(BulkMutationExecutor):
    entity_name = "user"

    def __init__(self, *, error: Exception | None = None, gate: asyncio.Event | None = None):
        self.calls: list[tuple] = []
        self._error = error
        self._gate = gate

    async def delete_many(self, ids: list[str]) -> int:
        self.calls.append(("delete", list(ids)))
        if self._gate is not None:
            await self._gate.wait()
        if self._error:
            raise self._error
        return len(ids)

    async def reassign_many(self, ids: list[str], target_team_id: str) -> int:
        self.calls.append(("reassign", list(ids), target_team_id))
        if self._error:
            raise self._error
        return len(ids)


# ── Tests ──


def test_request_with_empty_selection_is_refused():
    controller = BulkMutationController(FakeExecutor())

    with pytest.raises(NoSelectionError):
        controller.request_delete()
    with pytest.raises(NoSelectionError):
        controller.request_reassign("team-1")
    assert controller.pending_action is PendingAction.NONE


def test_select_one_toggles_membership():
    controller = BulkMutationController(FakeExecutor())
    controller.select_one("a", True)
    controller.select_one("b", True)
    controller.select_one("a", False)

    assert controller.selection == ["b"]


@pytest.mark.asyncio
async def test_confirm_delete_runs_one_call_and_resets_state():
    executor = FakeExecutor()
    controller = BulkMutationController(executor)
    notified = []
    controller.on_success(notified.append)

    controller.select_all(["u1", "u2", "u3"])
    controller.request_delete()
    outcome = await controller.confirm()

    assert executor.calls == [("delete", ["u1", "u2", "u3"])]
    assert outcome.action is PendingAction.DELETE
    assert outcome.affected == 3
    assert controller.selection == []
    assert controller.pending_action is PendingAction.NONE
    assert notified == [outcome]


@pytest.mark.asyncio
async def test_confirm_reassign_passes_target_team():
    executor = FakeExecutor()
    controller = BulkMutationController(executor)

    controller.select_all(["u1"])
    controller.request_reassign("team-2")
    assert "moved to the selected team" in controller.consequences()
    outcome = await controller.confirm()

    assert executor.calls == [("reassign", ["u1"], "team-2")]
    assert outcome.target_team_id == "team-2"


@pytest.mark.asyncio
async def test_cancel_clears_pending_action_without_mutating():
    executor = FakeExecutor()
    controller = BulkMutationController(executor)
    controller.select_all(["u1"])
    controller.request_delete()

    controller.cancel()

    assert await controller.confirm() is None
    assert executor.calls == []
    assert controller.selection == []


@pytest.mark.asyncio
async def test_failure_keeps_selection_and_pending_action():
    executor = FakeExecutor(error=RuntimeError("database is locked"))
    controller = BulkMutationController(executor)
    controller.select_all(["u1", "u2"])
    controller.request_delete()

    with pytest.raises(RuntimeError, match="database is locked"):
        await controller.confirm()

    assert controller.selection == ["u1", "u2"]
    assert controller.pending_action is PendingAction.DELETE
    assert controller.is_mutating is False


@pytest.mark.asyncio
async def test_confirm_while_mutating_is_ignored():
    gate = asyncio.Event()
    executor = FakeExecutor(gate=gate)
    controller = BulkMutationController(executor)
    controller.select_all(["u1"])
    controller.request_delete()

    first = asyncio.create_task(controller.confirm())
    await asyncio.sleep(0)
    assert controller.is_deleting is True

    assert await controller.confirm() is None
    gate.set()
    await first

    assert len(executor.calls) == 1


@pytest.mark.asyncio
async def test_async_observers_are_awaited():
    controller = BulkMutationController(FakeExecutor())
    reloaded = []

    async def reload(outcome):
        reloaded.append(outcome.affected)

    controller.on_success(reload)
    controller.select_all(["u1", "u2"])
    controller.request_delete()
    await controller.confirm()

    assert reloaded == [2]


def test_delete_consequences_use_executor_wording():
    controller = BulkMutationController(FakeExecutor())
    controller.select_all(["u1"])
    controller.request_delete()

    assert controller.consequences() == "1 user will be permanently deleted."
