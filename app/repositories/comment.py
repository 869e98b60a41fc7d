"""Comment repository for database operations."""

from typing import ClassVar
from uuid import UUID

from sqlalchemy import asc, select

from app.models.comment import CommentDB
from app.repositories.base import BaseRepository


class CommentRepository(BaseRepository[CommentDB]):
    model = CommentDB
    entity = "Comment"
    filter_fields: ClassVar[frozenset[str]] = frozenset(
        {"blog_id", "author_id", "viewer_id", "parent_comment"},
    )

    async def get_by_blog(self, blog_id: UUID) -> list[CommentDB]:
        """Every comment and reply on a blog, oldest first."""
        statement = (
            select(CommentDB)
            .where(CommentDB.blog_id == blog_id)
            .order_by(asc(CommentDB.created_at))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
