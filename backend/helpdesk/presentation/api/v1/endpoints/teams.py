"""Team endpoints: CRUD, membership, lead flag and bulk member actions."""

from fastapi import APIRouter, Depends, HTTPException, status

from helpdesk.application.schemas import (
    TeamCreate,
    TeamLeadUpdate,
    TeamMembersReassignRequest,
    TeamMembersRequest,
    TeamResponse,
    UserResponse,
)
from helpdesk.application.services import TeamService
from helpdesk.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    TeamLeadExistsError,
    TeamLeadMoveError,
)
from helpdesk.infrastructure.dependencies import get_team_service

router = APIRouter(prefix="/teams", tags=["Teams"])


@router.get("", response_model=list[TeamResponse])
async def list_teams(service: TeamService = Depends(get_team_service)) -> list[TeamResponse]:
    return [TeamResponse.model_validate(t, from_attributes=True) for t in await service.list_teams()]


@router.post("", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
async def create_team(data: TeamCreate, service: TeamService = Depends(get_team_service)) -> TeamResponse:
    try:
        team = await service.create_team(data.name, data.description)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return TeamResponse.model_validate(team, from_attributes=True)


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(team_id: str, service: TeamService = Depends(get_team_service)) -> TeamResponse:
    try:
        team = await service.get_team(team_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TeamResponse.model_validate(team, from_attributes=True)


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(team_id: str, service: TeamService = Depends(get_team_service)) -> None:
    """Delete a team; members stay but lose their team and lead flag."""
    try:
        await service.delete_team(team_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{team_id}/members", response_model=list[UserResponse])
async def list_members(team_id: str, service: TeamService = Depends(get_team_service)) -> list[UserResponse]:
    try:
        members = await service.list_members(team_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [UserResponse.model_validate(m, from_attributes=True) for m in members]


@router.put("/{team_id}/members/{user_id}", response_model=UserResponse)
async def add_member(team_id: str, user_id: str, service: TeamService = Depends(get_team_service)) -> UserResponse:
    try:
        user = await service.add_member(team_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.delete("/{team_id}/members/{user_id}", response_model=UserResponse)
async def remove_member(
    team_id: str, user_id: str, service: TeamService = Depends(get_team_service)
) -> UserResponse:
    try:
        user = await service.remove_member(team_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.put("/{team_id}/members/{user_id}/lead", response_model=UserResponse)
async def set_team_lead(
    team_id: str,
    user_id: str,
    data: TeamLeadUpdate,
    service: TeamService = Depends(get_team_service),
) -> UserResponse:
    """Toggle the lead flag; a team can have only one lead."""
    try:
        user = await service.set_team_lead(team_id, user_id, data.is_team_lead)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TeamLeadExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.post("/{team_id}/members/bulk/remove")
async def bulk_remove_members(
    team_id: str,
    data: TeamMembersRequest,
    service: TeamService = Depends(get_team_service),
) -> dict:
    try:
        affected = await service.bulk_remove_members(team_id, data.user_ids)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TeamLeadMoveError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return {"affected": affected}


@router.post("/{team_id}/members/bulk/reassign")
async def bulk_reassign_members(
    team_id: str,
    data: TeamMembersReassignRequest,
    service: TeamService = Depends(get_team_service),
) -> dict:
    """Move members to another team. Team leads are refused."""
    try:
        affected = await service.bulk_reassign_members(team_id, data.user_ids, data.target_team_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TeamLeadMoveError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return {"affected": affected, "target_team_id": data.target_team_id}
