"""Skill and proficiency vocabularies."""

from fastapi import APIRouter, Depends

from helpdesk.application.schemas import NamedResponse
from helpdesk.application.services import SkillService
from helpdesk.infrastructure.dependencies import get_skill_service

router = APIRouter(tags=["Skills"])


@router.get("/skills", response_model=list[NamedResponse])
async def list_skills(service: SkillService = Depends(get_skill_service)) -> list[NamedResponse]:
    return [NamedResponse.model_validate(s, from_attributes=True) for s in await service.list_skills()]


@router.get("/proficiencies", response_model=list[NamedResponse])
async def list_proficiencies(service: SkillService = Depends(get_skill_service)) -> list[NamedResponse]:
    return [NamedResponse.model_validate(p, from_attributes=True) for p in await service.list_proficiencies()]
