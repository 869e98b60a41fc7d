"""Category request and response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_NAME_LENGTH


class CategoryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str = Field(default="", max_length=2000)
    image_file: UUID | None = Field(default=None, alias="imageFile")


class CategoryUpdate(BaseModel):
    """
    Partial category update.

    `blogs` is maintained from the blog side and is rejected here.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=2000)
    image_file: UUID | None = Field(default=None, alias="imageFile")


class CategoryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    description: str
    slug: str
    image_file: UUID | None = Field(default=None, alias="imageFile")
    blogs: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
