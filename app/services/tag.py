"""Tag service."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors.database import DuplicateEntryError
from app.errors.validation import ValidationError
from app.models.tag import TagDB
from app.repositories import TagRepository
from app.schemas.tag import TagCreate, TagUpdate
from app.services.relations import ensure_unreferenced
from app.utils.helpers import slugify


class TagService:
    """Manage tags. Like categories, a tag in use cannot be deleted."""

    def __init__(self, session: AsyncSession) -> None:
        self.repo = TagRepository(session)

    async def _checked_name(self, name: str, exclude_id: UUID | None = None) -> tuple[str, str]:
        if await self.repo.exists_by_field("name", name, exclude_id=exclude_id):
            mssg = f"Tag '{name}' already exists"
            raise DuplicateEntryError(mssg)
        try:
            return name, slugify(name)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    async def create(self, data: TagCreate) -> TagDB:
        name, slug = await self._checked_name(data.name)
        return await self.repo.save(TagDB(name=name, slug=slug))

    async def get(self, tag_id: UUID) -> TagDB:
        return await self.repo.get_or_raise(tag_id)

    async def get_all(self, page: int, limit: int, sort: str = "name") -> list[TagDB]:
        return await self.repo.get_all(page=page, limit=limit, sort=sort)

    async def update(self, tag_id: UUID, data: TagUpdate) -> TagDB:
        tag = await self.repo.get_or_raise(tag_id)
        tag.name, tag.slug = await self._checked_name(data.name, exclude_id=tag.id)
        return await self.repo.save(tag)

    async def delete(self, tag_id: UUID) -> None:
        """
        Raises:
            RecordNotFoundError: If the tag does not exist
            ReferencedRecordError: If any blog still carries the tag
        """
        tag = await self.repo.get_or_raise(tag_id)
        ensure_unreferenced(tag, "Tag")
        await self.repo.delete(tag)
