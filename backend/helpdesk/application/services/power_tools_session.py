"""State behind one power-tools screen: the latest command result and the
bulk selection it seeds.
"""

import logging
from collections.abc import Awaitable, Callable

from helpdesk.application.services.bulk_mutation_controller import BulkMutationController
from helpdesk.application.services.command_dispatcher import CommandDispatcher
from helpdesk.domain.entities import CommandKind, CommandOutcome

logger = logging.getLogger(__name__)

TeamResolver = Callable[[str], Awaitable[str | None]]


class PowerToolsSession:
    """Submits commands and keeps only the newest answer.

    Every ``submit`` takes a generation number; a response that arrives after
    a newer command was submitted is dropped and leaves the screen state as
    it is. A failed dispatch also leaves it untouched.
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        controller: BulkMutationController,
        resolve_team_id: TeamResolver,
    ):
        self._dispatcher = dispatcher
        self._controller = controller
        self._resolve_team_id = resolve_team_id
        self._generation = 0
        self._latest: CommandOutcome | None = None

    @property
    def latest(self) -> CommandOutcome | None:
        return self._latest

    @property
    def controller(self) -> BulkMutationController:
        return self._controller

    async def submit(self, text: str) -> CommandOutcome | None:
        """Dispatch ``text``; returns None when a newer submission superseded it."""
        self._generation += 1
        generation = self._generation

        outcome = await self._dispatcher.dispatch(text)

        if generation != self._generation:
            logger.info("Dropping stale command result (generation %d < %d)", generation, self._generation)
            return None

        self._latest = outcome
        await self._seed_selection(outcome, generation)
        return outcome

    async def _seed_selection(self, outcome: CommandOutcome, generation: int) -> None:
        result = outcome.result
        if result.kind is CommandKind.LISTING:
            return
        ids = [person.id for person in result.subjects if person.id]
        if not ids:
            return

        if result.kind is CommandKind.DELETE_PENDING:
            self._controller.select_all(ids)
            self._controller.request_delete()
            return

        team_id = await self._resolve_team_id(result.target_team) if result.target_team else None
        if generation != self._generation:
            return
        if team_id is None:
            logger.warning("Reassign target team %r not found; nothing selected", result.target_team)
            return
        self._controller.select_all(ids)
        self._controller.request_reassign(team_id)
