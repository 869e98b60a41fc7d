"""Image file repository for database operations."""

from sqlalchemy import asc, desc

from app.models.image_file import ImageFileDB
from app.repositories.base import BaseRepository, SortOption


class ImageFileRepository(BaseRepository[ImageFileDB]):
    model = ImageFileDB
    entity = "ImageFile"

    def _ordered(self, statement, sort: SortOption):  # noqa: ANN001, ANN202
        # Image files have an upload date instead of a creation timestamp
        if sort == "oldest":
            return statement.order_by(asc(ImageFileDB.upload_date))
        return statement.order_by(desc(ImageFileDB.upload_date))
