"""User endpoints: overview, roles, skills and bulk actions."""

from fastapi import APIRouter, Depends, HTTPException, status

from helpdesk.application.schemas import (
    BulkIdsRequest,
    BulkMutationResponse,
    BulkTeamRequest,
    RoleUpdate,
    SkillAssign,
    SkillAssignmentResponse,
    UserCreate,
    UserOverviewResponse,
    UserResponse,
)
from helpdesk.application.services import MutationOutcome, SkillService, UserService
from helpdesk.domain.exceptions import EntityNotFoundError
from helpdesk.infrastructure.dependencies import get_skill_service, get_user_service

router = APIRouter(prefix="/users", tags=["Users"])


def _bulk_response(outcome: MutationOutcome) -> BulkMutationResponse:
    return BulkMutationResponse(
        action=outcome.action.value,
        affected=outcome.affected,
        ids=outcome.ids,
        target_team_id=outcome.target_team_id,
    )


@router.get("", response_model=list[UserOverviewResponse])
async def list_users(service: UserService = Depends(get_user_service)) -> list[UserOverviewResponse]:
    """Every user with team name and number of tickets created."""
    return [UserOverviewResponse.from_entity(o) for o in await service.list_users()]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(data: UserCreate, service: UserService = Depends(get_user_service)) -> UserResponse:
    user = await service.create_user(data.full_name, data.role)
    return UserResponse.model_validate(user, from_attributes=True)


@router.post("/bulk/delete", response_model=BulkMutationResponse)
async def bulk_delete_users(
    data: BulkIdsRequest,
    service: UserService = Depends(get_user_service),
) -> BulkMutationResponse:
    """Delete users together with their tickets, messages and skills."""
    return _bulk_response(await service.bulk_delete(data.ids))


@router.post("/bulk/reassign", response_model=BulkMutationResponse)
async def bulk_reassign_users(
    data: BulkTeamRequest,
    service: UserService = Depends(get_user_service),
) -> BulkMutationResponse:
    try:
        outcome = await service.bulk_reassign(data.ids, data.team_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _bulk_response(outcome)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserResponse:
    try:
        user = await service.get_user(user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.put("/{user_id}/role", response_model=UserResponse)
async def change_role(
    user_id: str,
    data: RoleUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await service.change_role(user_id, data.role)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.get("/{user_id}/skills", response_model=list[SkillAssignmentResponse])
async def list_user_skills(
    user_id: str,
    service: SkillService = Depends(get_skill_service),
) -> list[SkillAssignmentResponse]:
    try:
        assignments = await service.list_for_agent(user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [SkillAssignmentResponse.model_validate(a, from_attributes=True) for a in assignments]


@router.put("/{user_id}/skills", response_model=list[SkillAssignmentResponse])
async def assign_skill(
    user_id: str,
    data: SkillAssign,
    service: SkillService = Depends(get_skill_service),
) -> list[SkillAssignmentResponse]:
    """Add a skill to an agent or change its proficiency."""
    try:
        assignments = await service.assign(user_id, data.skill_id, data.proficiency_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [SkillAssignmentResponse.model_validate(a, from_attributes=True) for a in assignments]
