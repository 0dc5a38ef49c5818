"""Typed metadata values on a ticket."""

from fastapi import APIRouter, Depends, HTTPException, status

from helpdesk.application.schemas import MetadataValueResponse, MetadataValueSet
from helpdesk.application.services import TicketMetadataService
from helpdesk.domain.exceptions import EntityNotFoundError, InvalidMetadataValueError
from helpdesk.infrastructure.dependencies import get_ticket_metadata_service

router = APIRouter(prefix="/tickets/{ticket_id}/metadata", tags=["Ticket Metadata"])


@router.get("", response_model=list[MetadataValueResponse])
async def list_ticket_metadata(
    ticket_id: str,
    service: TicketMetadataService = Depends(get_ticket_metadata_service),
) -> list[MetadataValueResponse]:
    try:
        values = await service.list_for_ticket(ticket_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [MetadataValueResponse.from_entity(v) for v in values]


@router.put("/{field_id}", response_model=MetadataValueResponse)
async def set_ticket_metadata(
    ticket_id: str,
    field_id: str,
    data: MetadataValueSet,
    service: TicketMetadataService = Depends(get_ticket_metadata_service),
) -> MetadataValueResponse:
    """Set (or replace) the value of one field on the ticket."""
    try:
        value = await service.set_value(ticket_id, field_id, data.value)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidMetadataValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return MetadataValueResponse.from_entity(value)


@router.delete("/{field_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_ticket_metadata(
    ticket_id: str,
    field_id: str,
    service: TicketMetadataService = Depends(get_ticket_metadata_service),
) -> None:
    try:
        await service.remove_value(ticket_id, field_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
