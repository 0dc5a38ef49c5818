"""Selection and confirm-before-mutate state for bulk delete / reassign."""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from helpdesk.application.interfaces import BulkMutationExecutor
from helpdesk.domain.exceptions import NoSelectionError

logger = logging.getLogger(__name__)


class PendingAction(str, Enum):
    NONE = "none"
    DELETE = "delete"
    REASSIGN = "reassign"


@dataclass
class MutationOutcome:
    action: PendingAction
    ids: list[str]
    affected: int
    target_team_id: str | None = None


SuccessObserver = Callable[[MutationOutcome], Awaitable[None] | None]


class BulkMutationController:
    """Owns the selection of one listing and the action waiting for confirmation.

    Requesting an action only records it. ``confirm()`` performs exactly one
    executor call for the whole selection, and only if an action is pending
    and no other mutation is running. Observers registered with
    ``on_success`` are notified after a successful mutation, e.g. to reload
    the listing.
    """

    def __init__(self, executor: BulkMutationExecutor):
        self._executor = executor
        self._selection: dict[str, None] = {}
        self._pending = PendingAction.NONE
        self._target_team_id: str | None = None
        self._is_deleting = False
        self._is_reassigning = False
        self._observers: list[SuccessObserver] = []

    # ── State ────────────────────────────────────────────────────────

    @property
    def selection(self) -> list[str]:
        return list(self._selection)

    @property
    def pending_action(self) -> PendingAction:
        return self._pending

    @property
    def target_team_id(self) -> str | None:
        return self._target_team_id

    @property
    def is_deleting(self) -> bool:
        return self._is_deleting

    @property
    def is_reassigning(self) -> bool:
        return self._is_reassigning

    @property
    def is_mutating(self) -> bool:
        return self._is_deleting or self._is_reassigning

    def on_success(self, observer: SuccessObserver) -> None:
        self._observers.append(observer)

    # ── Selection ────────────────────────────────────────────────────

    def select_all(self, ids: Iterable[str]) -> None:
        self._selection = dict.fromkeys(ids)

    def select_one(self, item_id: str, included: bool) -> None:
        if included:
            self._selection[item_id] = None
        else:
            self._selection.pop(item_id, None)

    def clear(self) -> None:
        self._selection.clear()

    # ── Actions ──────────────────────────────────────────────────────

    def request_delete(self) -> None:
        if not self._selection:
            raise NoSelectionError(PendingAction.DELETE.value)
        self._pending = PendingAction.DELETE
        self._target_team_id = None

    def request_reassign(self, target_team_id: str) -> None:
        if not self._selection:
            raise NoSelectionError(PendingAction.REASSIGN.value)
        self._pending = PendingAction.REASSIGN
        self._target_team_id = target_team_id

    def cancel(self) -> None:
        self._pending = PendingAction.NONE
        self._target_team_id = None
        self._selection.clear()

    def consequences(self) -> str:
        """What confirming the pending action will do, for the confirmation prompt."""
        count = len(self._selection)
        if self._pending is PendingAction.DELETE:
            return self._executor.delete_consequences(count)
        if self._pending is PendingAction.REASSIGN:
            noun = self._executor.entity_name if count == 1 else f"{self._executor.entity_name}s"
            return f"{count} {noun} will be moved to the selected team."
        return ""

    async def confirm(self) -> MutationOutcome | None:
        """Run the pending action over the selection.

        Returns None without touching the executor when nothing is pending or
        a mutation is already in flight. On failure the selection and the
        pending action are kept so the user can retry, and the error is
        re-raised.
        """
        if self._pending is PendingAction.NONE or self.is_mutating:
            logger.debug("Ignoring confirm: pending=%s mutating=%s", self._pending.value, self.is_mutating)
            return None

        action = self._pending
        ids = list(self._selection)
        target_team_id = self._target_team_id
        if action is PendingAction.DELETE:
            self._is_deleting = True
        else:
            self._is_reassigning = True

        try:
            if action is PendingAction.DELETE:
                affected = await self._executor.delete_many(ids)
            else:
                affected = await self._executor.reassign_many(ids, target_team_id)
        except Exception:
            logger.exception("Bulk %s of %d %s(s) failed", action.value, len(ids), self._executor.entity_name)
            raise
        finally:
            self._is_deleting = False
            self._is_reassigning = False

        self._selection.clear()
        self._pending = PendingAction.NONE
        self._target_team_id = None
        outcome = MutationOutcome(action=action, ids=ids, affected=affected, target_team_id=target_team_id)
        logger.info("Bulk %s affected %d %s(s)", action.value, affected, self._executor.entity_name)

        for observer in list(self._observers):
            result = observer(outcome)
            if inspect.isawaitable(result):
                await result
        return outcome
