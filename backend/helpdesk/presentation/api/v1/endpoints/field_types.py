"""Metadata field catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from helpdesk.application.schemas import FieldTypeCreate, FieldTypeResponse
from helpdesk.application.services import FieldCatalogService
from helpdesk.domain.exceptions import EntityNotFoundError, FieldExistsError
from helpdesk.infrastructure.dependencies import get_field_catalog_service

router = APIRouter(prefix="/field-types", tags=["Field Types"])


@router.get("", response_model=list[FieldTypeResponse])
async def list_field_types(
    service: FieldCatalogService = Depends(get_field_catalog_service),
) -> list[FieldTypeResponse]:
    definitions = await service.list()
    return [FieldTypeResponse.model_validate(d, from_attributes=True) for d in definitions]


@router.post("", response_model=FieldTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_field_type(
    data: FieldTypeCreate,
    service: FieldCatalogService = Depends(get_field_catalog_service),
) -> FieldTypeResponse:
    """Create a field; its value type cannot be changed afterwards."""
    try:
        definition = await service.create(data.name, data.value_type, data.description)
    except FieldExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return FieldTypeResponse.model_validate(definition, from_attributes=True)


@router.delete("/{field_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_field_type(
    field_id: str,
    service: FieldCatalogService = Depends(get_field_catalog_service),
) -> None:
    """Delete a field together with every value recorded for it."""
    try:
        await service.delete(field_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
