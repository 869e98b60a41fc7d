"""
Blog request and response schemas.

Responses use camelCase aliases; request bodies accept either form.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.configs.settings import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH

PublishAction = Literal["save", "publish"]


def clean_title(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        mssg = "Title must not be blank"
        raise ValueError(mssg)
    return value


class BlogCreate(BaseModel):
    """Validated fields of the multipart blog creation form."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    category: UUID | None = None
    tags: list[UUID] = Field(default_factory=list)
    is_private: bool = Field(default=False, alias="isPrivate")
    existing_image_id: UUID | None = Field(default=None, alias="existingImageId")

    check_title = field_validator("title")(clean_title)


class BlogUpdate(BaseModel):
    """
    Partial blog update.

    Fields left out are not touched. `category` and `imageFile` may be sent as
    `null` to clear them; `likes` replaces the whole likes array.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str | None = Field(default=None, min_length=1, max_length=MAX_CONTENT_LENGTH)
    category: UUID | None = None
    tags: list[UUID] | None = None
    likes: list[UUID] | None = None
    image_file: UUID | None = Field(default=None, alias="imageFile")
    is_private: bool | None = Field(default=None, alias="isPrivate")

    check_title = field_validator("title")(clean_title)


class BlogResponse(BaseModel):
    """Blog as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    slug: str
    content: str
    author_id: UUID = Field(alias="authorId")
    image_file: UUID | None = Field(default=None, alias="imageFile")
    category: UUID | None = None
    tags: list[UUID] = Field(default_factory=list)
    likes: list[UUID] = Field(default_factory=list)
    comments: list[UUID] = Field(default_factory=list)
    is_private: bool = Field(alias="isPrivate")
    is_published: bool = Field(alias="isPublished")
    published_at: datetime | None = Field(default=None, alias="publishedAt")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
