"""Power tools: natural-language operator queries that can seed a bulk action."""

from fastapi import APIRouter, Depends, HTTPException

from helpdesk.application.schemas import CommandRequest, CommandResponse
from helpdesk.application.services import CommandDispatcher, PowerToolsSession, UserService
from helpdesk.domain.exceptions import CommandDispatchError
from helpdesk.infrastructure.dependencies import get_command_dispatcher, get_user_service

router = APIRouter(prefix="/power-tools", tags=["Power Tools"])


@router.post("/command", response_model=CommandResponse)
async def run_command(
    data: CommandRequest,
    dispatcher: CommandDispatcher = Depends(get_command_dispatcher),
    users: UserService = Depends(get_user_service),
) -> CommandResponse:
    """Dispatch a command and classify its rows.

    When the result asks for a deletion or a reassignment, the response also
    carries the confirmation text for the seeded bulk action. Nothing is
    mutated here; confirming goes through the ``/users/bulk/*`` endpoints.
    """
    session = PowerToolsSession(dispatcher, users.bulk_controller(), users.resolve_team_id)
    try:
        outcome = await session.submit(data.text)
    except CommandDispatchError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CommandResponse.from_outcome(outcome, session.controller.consequences() or None)
