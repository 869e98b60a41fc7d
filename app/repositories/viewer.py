"""Viewer repository for database operations."""

from app.models.viewer import ViewerDB
from app.repositories.base import BaseRepository


class ViewerRepository(BaseRepository[ViewerDB]):
    model = ViewerDB
    entity = "Viewer"

    async def get_by_username(self, username: str) -> ViewerDB | None:
        return await self.get_by_field("username", username)
