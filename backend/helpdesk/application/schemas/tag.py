"""Pydantic DTOs for tags and tag types."""

from pydantic import BaseModel, Field


class TagTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Category"])
    description: str | None = None


class TagTypeResponse(BaseModel):
    id: str
    name: str
    description: str | None = None

    model_config = {"from_attributes": True}


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Hardware"])
    type_id: str
    description: str | None = None


class TagResponse(BaseModel):
    id: str
    name: str
    type_id: str
    description: str | None = None

    model_config = {"from_attributes": True}
