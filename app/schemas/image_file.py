"""Image file request and response schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class Credit(BaseModel):
    """Attribution for an image taken from a third party."""

    model_config = ConfigDict(populate_by_name=True)

    author_name: str | None = Field(default=None, alias="authorName", max_length=200)
    author_url: HttpUrl | None = Field(default=None, alias="authorURL")
    source_name: str | None = Field(default=None, alias="sourceName", max_length=200)
    source_url: HttpUrl | None = Field(default=None, alias="sourceURL")


class ImageFileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    credit: Credit | None = None


class ReferencedDoc(BaseModel):
    kind: Literal["blog", "author", "category"]
    id: UUID


class ImageFileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    file_name: str = Field(alias="fileName")
    file_type: str = Field(alias="fileType")
    size: int
    url: str
    upload_date: datetime = Field(alias="uploadDate")
    credit: Credit | None = None
    referenced_docs: list[ReferencedDoc] = Field(default_factory=list, alias="referencedDocs")
