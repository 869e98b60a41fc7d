"""Image file metadata service and image reference bookkeeping."""

from functools import partial
from logging import getLogger
from typing import Any
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.db import after_commit, after_rollback
from app.errors.database import RecordNotFoundError
from app.models.image_file import ImageFileDB
from app.repositories import (
    AuthorRepository,
    BlogRepository,
    CategoryRepository,
    ImageFileRepository,
)
from app.repositories.base import BaseRepository
from app.schemas.image_file import Credit
from app.services.media import MediaService
from app.services.relations import (
    Relation,
    RelationDiff,
    image_ref,
    release_image_references,
)

logger = file_logger(getLogger(__name__))


def image_relation(repository: ImageFileRepository, kind: str, owner_id: UUID) -> Relation:
    """The `image_file` relation of a blog, author or category."""
    return Relation(
        field="image_file",
        related=repository,
        owner_ref=image_ref(kind, owner_id),
        back_ref="referenced_docs",
    )


class ImageFileService:
    """
    Upload, describe and delete image files.

    Deleting an image clears every `image_file` that points at it and then
    removes the binary from the object store.
    """

    def __init__(self, session: AsyncSession, media: MediaService) -> None:
        self.session = session
        self.repo = ImageFileRepository(session)
        self.media = media
        self.owners: dict[str, BaseRepository[Any]] = {
            "blog": BlogRepository(session),
            "author": AuthorRepository(session),
            "category": CategoryRepository(session),
        }

    async def upload(self, file: UploadFile, credit: Credit | None = None) -> ImageFileDB:
        """
        Validate and store an upload, then record its metadata.

        The stored binary is removed again if the surrounding transaction
        rolls back, so a failed request leaves no orphan in the object store.
        """
        uploaded = await self.media.upload_image(file)
        after_rollback(self.session, partial(self.media.delete, uploaded.stored.key))
        image = ImageFileDB(
            id=uploaded.media_id,
            file_name=uploaded.file_name,
            file_type=uploaded.content_type,
            size=uploaded.size,
            url=uploaded.stored.url,
            storage_key=uploaded.stored.key,
            credit=credit.model_dump(mode="json") if credit else None,
        )
        return await self.repo.save(image)

    async def get(self, image_id: UUID) -> ImageFileDB:
        return await self.repo.get_or_raise(image_id)

    async def get_all(self, page: int, limit: int) -> list[ImageFileDB]:
        return await self.repo.get_all(page=page, limit=limit)

    async def read_source(self, image_id: UUID) -> tuple[ImageFileDB, bytes]:
        """
        Load an image's metadata and binary.

        Raises:
            RecordNotFoundError: If the metadata or the binary is missing
        """
        image = await self.repo.get_or_raise(image_id)
        data = await self.media.read(image.storage_key)
        if data is None:
            raise RecordNotFoundError(detail=f"Binary for image {image_id} not found")
        return image, data

    async def update_credit(self, image_id: UUID, credit: Credit | None) -> ImageFileDB:
        image = await self.repo.get_or_raise(image_id)
        image.credit = credit.model_dump(mode="json") if credit else None
        return await self.repo.save(image)

    async def sync_reference(
        self,
        kind: str,
        owner_id: UUID,
        old_image: UUID | None,
        new_image: UUID | None,
        *,
        strict: bool = False,
    ) -> RelationDiff:
        """
        Move a record's reference from `old_image` to `new_image`.

        Raises:
            RecordNotFoundError: If `strict` and `new_image` does not exist
        """
        relation = image_relation(self.repo, kind, owner_id)
        return await relation.sync(old_image, new_image, strict=strict)

    async def release(self, kind: str, owner_id: UUID, image_id: UUID | None) -> None:
        """Drop a deleted record from its image's `referenced_docs`."""
        await self.sync_reference(kind, owner_id, image_id, None)

    async def delete(self, image_id: UUID) -> int:
        """
        Delete an image file, clearing every reference to it.

        The binary is deleted once, after the transaction that cleared the
        references and removed the metadata row has committed.

        Returns:
            int: Number of records whose `image_file` was cleared

        Raises:
            RecordNotFoundError: If the image does not exist
            RelationSyncError: If a referencing record cannot be written
        """
        image = await self.repo.get_or_raise(image_id)
        released = await release_image_references(image, self.owners)
        storage_key = image.storage_key
        await self.repo.delete(image)
        after_commit(self.session, partial(self.media.delete, storage_key))
        logger.info(f"Deleted image {image_id}, released {released} reference(s)")
        return released
