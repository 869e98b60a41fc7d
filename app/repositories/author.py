"""Author repository for database operations."""

from sqlalchemy import select

from app.models.author import AuthorDB
from app.repositories.base import BaseRepository


class AuthorRepository(BaseRepository[AuthorDB]):
    model = AuthorDB
    entity = "Author"

    async def get_single(self) -> AuthorDB | None:
        """Return the site's only author, if registered."""
        result = await self.session.execute(select(AuthorDB).limit(1))
        return result.scalars().first()

    async def get_by_username(self, username: str) -> AuthorDB | None:
        return await self.get_by_field("username", username)
