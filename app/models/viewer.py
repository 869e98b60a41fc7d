"""Viewer database model."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import MAX_USERNAME_LENGTH
from app.models.columns import created_at_column, json_list_column, updated_at_column
from app.utils.helpers import utc_now


class ViewerDB(SQLModel, table=True):
    """A registered reader who may comment and like."""

    __tablename__ = cast("declared_attr[str]", "viewers")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    name: str = Field(sa_column=Column(String(100), nullable=False))
    username: str = Field(
        sa_column=Column(String(MAX_USERNAME_LENGTH), unique=True, nullable=False, index=True),
    )
    password_hash: str = Field(sa_column=Column(String(255), nullable=False))
    comments: list[str] = Field(default_factory=list, sa_column=json_list_column())

    created_at: datetime = Field(default_factory=utc_now, sa_column=created_at_column())
    updated_at: datetime | None = Field(default=None, sa_column=updated_at_column())
