"""Tag repository for database operations."""

from typing import ClassVar

from app.models.tag import TagDB
from app.repositories.base import BaseRepository


class TagRepository(BaseRepository[TagDB]):
    model = TagDB
    entity = "Tag"
    filter_fields: ClassVar[frozenset[str]] = frozenset({"slug", "name"})

    async def get_by_name(self, name: str) -> TagDB | None:
        return await self.get_by_field("name", name.lower())
