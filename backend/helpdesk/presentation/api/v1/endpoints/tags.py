"""Tag and tag type endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from helpdesk.application.schemas import TagCreate, TagResponse, TagTypeCreate, TagTypeResponse
from helpdesk.application.services import TagService
from helpdesk.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from helpdesk.infrastructure.dependencies import get_tag_service

router = APIRouter(tags=["Tags"])


@router.get("/tag-types", response_model=list[TagTypeResponse])
async def list_tag_types(service: TagService = Depends(get_tag_service)) -> list[TagTypeResponse]:
    return [TagTypeResponse.model_validate(t, from_attributes=True) for t in await service.list_types()]


@router.post("/tag-types", response_model=TagTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_tag_type(
    data: TagTypeCreate,
    service: TagService = Depends(get_tag_service),
) -> TagTypeResponse:
    try:
        tag_type = await service.create_type(data.name, data.description)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return TagTypeResponse.model_validate(tag_type, from_attributes=True)


@router.delete("/tag-types/{type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag_type(type_id: str, service: TagService = Depends(get_tag_service)) -> None:
    """Delete a tag type and all tags of that type."""
    try:
        await service.delete_type(type_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/tags", response_model=list[TagResponse])
async def list_tags(
    type_id: str | None = None,
    service: TagService = Depends(get_tag_service),
) -> list[TagResponse]:
    return [TagResponse.model_validate(t, from_attributes=True) for t in await service.list_tags(type_id)]


@router.post("/tags", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(data: TagCreate, service: TagService = Depends(get_tag_service)) -> TagResponse:
    try:
        tag = await service.create_tag(data.name, data.type_id, data.description)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return TagResponse.model_validate(tag, from_attributes=True)


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(tag_id: str, service: TagService = Depends(get_tag_service)) -> None:
    try:
        await service.delete_tag(tag_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
