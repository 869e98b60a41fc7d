"""Category repository for database operations."""

from typing import ClassVar
from uuid import UUID

from sqlalchemy import func, select

from app.models.category import CategoryDB
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryDB]):
    model = CategoryDB
    entity = "Category"
    filter_fields: ClassVar[frozenset[str]] = frozenset({"slug", "name"})

    async def name_taken(self, name: str, exclude_id: UUID | None = None) -> bool:
        """Case-insensitive name uniqueness check."""
        statement = select(1).where(func.lower(CategoryDB.name) == name.lower())
        if exclude_id is not None:
            statement = statement.where(CategoryDB.id != exclude_id)
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None
