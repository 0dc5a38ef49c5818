"""Ticket conversation endpoints, including the live message stream."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from helpdesk.application.schemas import MessageCreate, MessageResponse
from helpdesk.application.services import ChangeFeed, MessageService
from helpdesk.application.services.message_service import MESSAGES_TABLE
from helpdesk.domain.entities import RowPredicate
from helpdesk.domain.exceptions import EntityNotFoundError
from helpdesk.infrastructure.dependencies import get_change_feed, get_message_service

router = APIRouter(prefix="/tickets/{ticket_id}/messages", tags=["Messages"])


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    ticket_id: str,
    service: MessageService = Depends(get_message_service),
) -> list[MessageResponse]:
    """Messages of the ticket, oldest first."""
    try:
        messages = await service.list_messages(ticket_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def post_message(
    ticket_id: str,
    data: MessageCreate,
    service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    try:
        message = await service.post_message(ticket_id, data.content, sender_id=data.sender_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return MessageResponse.model_validate(message, from_attributes=True)


@router.get("/stream")
async def stream_messages(
    ticket_id: str,
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> StreamingResponse:
    """SSE stream of 'change' events for new messages on this ticket.

    Clients reload the conversation when an event arrives.
    """

    async def events():
        async for change in change_feed.subscribe(MESSAGES_TABLE, RowPredicate("ticket_id", ticket_id)):
            yield ChangeFeed.to_sse(change)

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
