"""Image file metadata model."""

from datetime import datetime
from typing import Any, cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.models.columns import JSONDocument, json_list_column
from app.utils.helpers import utc_now


class ImageFileDB(SQLModel, table=True):
    """
    Metadata for a binary stored in the object store.

    `referenced_docs` holds tagged references, `{"kind": ..., "id": ...}`
    with kind one of `blog`, `author` or `category`, naming every record
    whose `image_file` is this id.
    """

    __tablename__ = cast("declared_attr[str]", "image_files")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    file_name: str = Field(sa_column=Column(String(255), nullable=False))
    file_type: str = Field(sa_column=Column(String(50), nullable=False))
    size: int = Field(default=0, nullable=False, description="Size in bytes")
    url: str = Field(sa_column=Column(String(500), nullable=False))
    storage_key: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Object store key used for reads and deletes",
    )
    credit: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONDocument, nullable=True),
        description="author_name / author_url / source_name / source_url",
    )
    referenced_docs: list[dict[str, str]] = Field(
        default_factory=list,
        sa_column=json_list_column(),
    )
    upload_date: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
