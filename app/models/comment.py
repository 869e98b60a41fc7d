"""Comment database model."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel

from app.models.columns import created_at_column, json_list_column, updated_at_column
from app.utils.helpers import utc_now


class CommentDB(SQLModel, table=True):
    """
    Comment or reply on a blog.

    Exactly one of `author_id` and `viewer_id` is set. Replies carry the id
    of their parent in `parent_comment` and are listed in the parent's
    `replies`; only top-level comments are listed in the blog's `comments`.
    """

    __tablename__ = cast("declared_attr[str]", "comments")

    __table_args__ = (Index("ix_comments_blog_parent", "blog_id", "parent_comment"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    content: str = Field(sa_column=Column(Text, nullable=False))
    author_id: UUID | None = Field(default=None)
    viewer_id: UUID | None = Field(default=None)
    blog_id: UUID = Field(index=True)
    parent_comment: UUID | None = Field(default=None)
    replies: list[str] = Field(default_factory=list, sa_column=json_list_column())
    likes: list[str] = Field(default_factory=list, sa_column=json_list_column())

    created_at: datetime = Field(default_factory=utc_now, sa_column=created_at_column())
    updated_at: datetime | None = Field(default=None, sa_column=updated_at_column())

    @property
    def principal_id(self) -> UUID | None:
        return self.author_id or self.viewer_id
