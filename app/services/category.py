"""Category service."""

from logging import getLogger
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.errors.database import DuplicateEntryError
from app.errors.validation import ValidationError
from app.models.blog import BlogDB
from app.models.category import CategoryDB
from app.repositories import CategoryRepository
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.services.image_file import ImageFileService
from app.services.media import MediaService
from app.services.relations import ensure_unreferenced
from app.utils.helpers import slugify

logger = file_logger(getLogger(__name__))


class CategoryService:
    """
    Manage categories.

    A category's `blogs` list is written only from the blog side; a category
    that still lists blogs cannot be deleted.
    """

    def __init__(self, session: AsyncSession, media: MediaService) -> None:
        self.session = session
        self.repo = CategoryRepository(session)
        self.images = ImageFileService(session, media)

    async def _checked_name(self, name: str, exclude_id: UUID | None = None) -> tuple[str, str]:
        name = name.strip()
        if await self.repo.name_taken(name, exclude_id=exclude_id):
            mssg = f"Category '{name}' already exists"
            raise DuplicateEntryError(mssg)
        try:
            return name, slugify(name)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    async def create(self, data: CategoryCreate) -> CategoryDB:
        """
        Create a category, optionally pointing at an existing image.

        Raises:
            DuplicateEntryError: If the name is taken (case-insensitively)
            RecordNotFoundError: If `imageFile` does not exist
        """
        name, slug = await self._checked_name(data.name)
        category = CategoryDB(
            name=name,
            slug=slug,
            description=data.description,
            image_file=data.image_file,
        )
        category = await self.repo.save(category)
        await self.images.sync_reference("category", category.id, None, data.image_file, strict=True)
        return category

    async def get(self, category_id: UUID) -> CategoryDB:
        return await self.repo.get_or_raise(category_id)

    async def get_all(self, page: int, limit: int, sort: str = "name") -> list[CategoryDB]:
        return await self.repo.get_all(page=page, limit=limit, sort=sort)

    async def get_with_published_blogs(self) -> list[CategoryDB]:
        """Categories that hold at least one public, published blog."""
        statement = (
            select(BlogDB.category)
            .where(
                BlogDB.is_published.is_(True),
                BlogDB.is_private.is_(False),
                BlogDB.category.is_not(None),
            )
            .distinct()
        )
        result = await self.session.execute(statement)
        category_ids = list(result.scalars().all())
        categories = await self.repo.get_many(category_ids)
        return sorted(categories, key=lambda category: category.name.lower())

    async def update(self, category_id: UUID, data: CategoryUpdate) -> CategoryDB:
        """
        Rename, describe or re-image a category.

        Raises:
            RecordNotFoundError: If the category does not exist
            DuplicateEntryError: If the new name is taken
        """
        category = await self.repo.get_or_raise(category_id)
        if data.name is not None:
            category.name, category.slug = await self._checked_name(
                data.name,
                exclude_id=category.id,
            )
        if data.description is not None:
            category.description = data.description
        if "image_file" in data.model_fields_set:
            await self.images.sync_reference(
                "category",
                category.id,
                category.image_file,
                data.image_file,
            )
            category.image_file = data.image_file
        return await self.repo.save(category)

    async def update_image(self, category_id: UUID, image: UploadFile) -> CategoryDB:
        category = await self.repo.get_or_raise(category_id)
        new_image = await self.images.upload(image)
        await self.images.sync_reference("category", category.id, category.image_file, new_image.id)
        category.image_file = new_image.id
        return await self.repo.save(category)

    async def delete(self, category_id: UUID) -> None:
        """
        Delete a category no blog points at.

        Raises:
            RecordNotFoundError: If the category does not exist
            ReferencedRecordError: If any blog still uses the category
        """
        category = await self.repo.get_or_raise(category_id)
        ensure_unreferenced(category, "Category")
        await self.images.release("category", category.id, category.image_file)
        await self.repo.delete(category)
        logger.info(f"Category {category_id} deleted")
