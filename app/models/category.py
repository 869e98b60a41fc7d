"""Category database model."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import MAX_NAME_LENGTH
from app.models.columns import created_at_column, json_list_column, updated_at_column
from app.utils.helpers import utc_now


class CategoryDB(SQLModel, table=True):
    """
    Category database model.

    `blogs` lists the ids of every Blog whose `category` is this record.
    """

    __tablename__ = cast("declared_attr[str]", "categories")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    name: str = Field(
        sa_column=Column(String(MAX_NAME_LENGTH), unique=True, nullable=False, index=True),
    )
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    slug: str = Field(
        sa_column=Column(String(MAX_NAME_LENGTH), unique=True, nullable=False, index=True),
    )
    image_file: UUID | None = Field(default=None)
    blogs: list[str] = Field(default_factory=list, sa_column=json_list_column())

    created_at: datetime = Field(default_factory=utc_now, sa_column=created_at_column())
    updated_at: datetime | None = Field(default=None, sa_column=updated_at_column())
