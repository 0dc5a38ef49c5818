"""Ticket endpoints: CRUD, metadata search, tags and bulk actions."""

from fastapi import APIRouter, Depends, HTTPException, status

from helpdesk.application.schemas import (
    BulkIdsRequest,
    BulkMutationResponse,
    BulkTeamRequest,
    TicketCreate,
    TicketDetailResponse,
    TicketResponse,
    TicketSearchRequest,
    TicketTeamUpdate,
)
from helpdesk.application.services import (
    FieldCatalogService,
    FilterBuilder,
    MutationOutcome,
    TagService,
    TicketService,
)
from helpdesk.domain.exceptions import EntityNotFoundError, InvalidMetadataValueError
from helpdesk.infrastructure.dependencies import (
    get_field_catalog_service,
    get_tag_service,
    get_ticket_service,
)

router = APIRouter(prefix="/tickets", tags=["Tickets"])


def _bulk_response(outcome: MutationOutcome) -> BulkMutationResponse:
    return BulkMutationResponse(
        action=outcome.action.value,
        affected=outcome.affected,
        ids=outcome.ids,
        target_team_id=outcome.target_team_id,
    )


@router.get("", response_model=list[TicketResponse])
async def list_tickets(
    team_id: str | None = None,
    skip: int = 0,
    limit: int = 100,
    service: TicketService = Depends(get_ticket_service),
) -> list[TicketResponse]:
    tickets = await service.list_tickets(team_id=team_id, skip=skip, limit=limit)
    return [TicketResponse.model_validate(t, from_attributes=True) for t in tickets]


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    data: TicketCreate,
    service: TicketService = Depends(get_ticket_service),
) -> TicketResponse:
    try:
        ticket = await service.create_ticket(
            data.title,
            description=data.description,
            creator_id=data.creator_id,
            team_id=data.team_id,
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return TicketResponse.model_validate(ticket, from_attributes=True)


@router.post("/search", response_model=list[TicketResponse])
async def search_tickets(
    data: TicketSearchRequest,
    service: TicketService = Depends(get_ticket_service),
    catalog: FieldCatalogService = Depends(get_field_catalog_service),
) -> list[TicketResponse]:
    """Tickets whose metadata equals every predicate and that carry every listed tag."""
    builder = FilterBuilder()
    try:
        for predicate in data.predicates:
            builder.set_predicate(await catalog.get(predicate.field_id), predicate.value)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidMetadataValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    builder.set_tags(data.tag_ids)
    builder.set_enabled(data.enabled)

    tickets = await service.search(
        builder.to_ticket_query(team_id=data.team_id), skip=data.skip, limit=data.limit
    )
    return [TicketResponse.model_validate(t, from_attributes=True) for t in tickets]


@router.post("/bulk/delete", response_model=BulkMutationResponse)
async def bulk_delete_tickets(
    data: BulkIdsRequest,
    service: TicketService = Depends(get_ticket_service),
) -> BulkMutationResponse:
    return _bulk_response(await service.bulk_delete(data.ids))


@router.post("/bulk/team", response_model=BulkMutationResponse)
async def bulk_move_tickets(
    data: BulkTeamRequest,
    service: TicketService = Depends(get_ticket_service),
) -> BulkMutationResponse:
    try:
        outcome = await service.bulk_move_team(data.ids, data.team_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _bulk_response(outcome)


@router.get("/{ticket_id}", response_model=TicketDetailResponse)
async def get_ticket(
    ticket_id: str,
    service: TicketService = Depends(get_ticket_service),
) -> TicketDetailResponse:
    """Ticket with team, creator, tags and metadata values."""
    try:
        detail = await service.get_ticket(ticket_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TicketDetailResponse.from_entity(detail)


@router.put("/{ticket_id}/team", response_model=TicketResponse)
async def set_ticket_team(
    ticket_id: str,
    data: TicketTeamUpdate,
    service: TicketService = Depends(get_ticket_service),
) -> TicketResponse:
    try:
        ticket = await service.set_team(ticket_id, data.team_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TicketResponse.model_validate(ticket, from_attributes=True)


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(
    ticket_id: str,
    service: TicketService = Depends(get_ticket_service),
) -> None:
    """Delete a ticket with its messages, tag links and metadata."""
    try:
        await service.delete_ticket(ticket_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{ticket_id}/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def attach_tag(
    ticket_id: str,
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> None:
    try:
        await service.attach(ticket_id, tag_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{ticket_id}/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def detach_tag(
    ticket_id: str,
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> None:
    try:
        await service.detach(ticket_id, tag_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
