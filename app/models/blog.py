"""Blog database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import Boolean, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from app.configs.settings import MAX_TITLE_LENGTH
from app.models.columns import created_at_column, json_list_column, updated_at_column
from app.utils.helpers import utc_now


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    `category`, `image_file` and `tags` are forward references maintained by
    the application; the referenced records mirror them in their own `blogs`
    or `referenced_docs` lists. `likes` and `comments` hold id strings.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_published_created", "is_published", "created_at"),
        Index("ix_blogs_category", "category"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("authors.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to authors.id)",
    )

    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Blog title",
    )
    slug: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), unique=True, nullable=False, index=True),
        description="URL-friendly slug derived from the title (unique)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog content (HTML or markdown)",
    )

    image_file: UUID | None = Field(default=None, description="Cover ImageFile ID")
    category: UUID | None = Field(default=None, description="Category ID")
    tags: list[str] = Field(
        default_factory=list,
        sa_column=json_list_column(),
        description="Tag IDs",
    )
    likes: list[str] = Field(
        default_factory=list,
        sa_column=json_list_column(),
        description="Author/Viewer IDs that liked the blog",
    )
    comments: list[str] = Field(
        default_factory=list,
        sa_column=json_list_column(),
        description="Top-level comment IDs in creation order",
    )

    is_private: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
    )
    is_published: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False, index=True),
    )
    published_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Set once, on first publish",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=created_at_column(),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=updated_at_column(),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Understanding Python descriptors",
                "slug": "understanding-python-descriptors",
                "content": "<p>Descriptors power properties...</p>",
                "category": None,
                "tags": [],
                "is_published": False,
            },
        },
    )
