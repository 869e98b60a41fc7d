"""Blog repository for database operations."""

from typing import ClassVar

from sqlalchemy import desc, select

from app.models.blog import BlogDB
from app.repositories.base import BaseRepository


class BlogRepository(BaseRepository[BlogDB]):
    """Repository for Blog records."""

    model = BlogDB
    entity = "Blog"
    filter_fields: ClassVar[frozenset[str]] = frozenset(
        {"category", "is_published", "is_private", "author_id"},
    )

    async def get_by_slug(self, slug: str) -> BlogDB | None:
        return await self.get_by_field("slug", slug)

    async def get_published(self, page: int = 1, limit: int = 8) -> list[BlogDB]:
        """Return public, published blogs, newest publication first."""
        statement = (
            select(BlogDB)
            .where(BlogDB.is_published.is_(True), BlogDB.is_private.is_(False))
            .order_by(desc(BlogDB.published_at))
            .offset((max(page, 1) - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_published(self) -> int:
        return await self.count({"is_published": True, "is_private": False})

    async def get_published_without_category(self) -> list[BlogDB]:
        statement = (
            select(BlogDB)
            .where(
                BlogDB.is_published.is_(True),
                BlogDB.is_private.is_(False),
                BlogDB.category.is_(None),
            )
            .order_by(desc(BlogDB.published_at))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
