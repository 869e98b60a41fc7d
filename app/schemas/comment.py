"""Comment request and response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_COMMENT_LENGTH


class ReplyCreate(BaseModel):
    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)


class CommentCreate(ReplyCreate):
    model_config = ConfigDict(populate_by_name=True)

    blog_id: UUID = Field(alias="blogId")


class CommentUpdate(BaseModel):
    """Edit the text and/or replace the whole likes array."""

    model_config = ConfigDict(extra="forbid")

    content: str | None = Field(default=None, min_length=1, max_length=MAX_COMMENT_LENGTH)
    likes: list[UUID] | None = None


class CommentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    content: str
    author_id: UUID | None = Field(default=None, alias="authorId")
    viewer_id: UUID | None = Field(default=None, alias="viewerId")
    blog_id: UUID = Field(alias="blogId")
    parent_comment: UUID | None = Field(default=None, alias="parentComment")
    replies: list[UUID] = Field(default_factory=list)
    likes: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
