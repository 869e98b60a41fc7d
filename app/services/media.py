"""
Image upload validation and storage.

Uploads are checked for type, size and decodability before any bytes reach
the object store.
"""

from dataclasses import dataclass
from io import BytesIO
from logging import getLogger
from uuid import UUID, uuid4

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from app.configs import file_logger
from app.configs.settings import settings
from app.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    UnsupportedImageTypeError,
)
from app.services.storage import StorageService, StoredMedia

logger = file_logger(getLogger(__name__))

IMAGE_FOLDER = "image_files"


@dataclass(frozen=True)
class UploadedImage:
    """An image that passed validation and was written to the object store."""

    media_id: UUID
    file_name: str
    content_type: str
    size: int
    stored: StoredMedia


class MediaService:
    """Validate uploaded images and hand them to the configured storage backend."""

    def __init__(self, storage: StorageService) -> None:
        self.storage = storage
        self.image_max_size_bytes = settings.MEDIA_IMAGE_MAX_SIZE_MB * 1024 * 1024
        self.image_allowed_types = settings.MEDIA_IMAGE_ALLOWED_TYPES

    def _validate_image_type(self, content_type: str | None) -> str:
        """Validate image content type."""
        if not content_type or content_type not in self.image_allowed_types:
            raise UnsupportedImageTypeError(
                content_type=content_type or "unknown",
                allowed_types=self.image_allowed_types,
            )
        return content_type

    def _validate_image_size(self, file_data: bytes) -> None:
        """Validate image file size."""
        actual_size = len(file_data)
        if actual_size > self.image_max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.MEDIA_IMAGE_MAX_SIZE_MB,
                actual_size_mb=actual_size / (1024 * 1024),
            )

    def _validate_image_content(self, file_data: bytes) -> None:
        """Validate that the bytes decode as an image."""
        try:
            with Image.open(BytesIO(file_data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            mssg = f"Invalid or corrupted image file: {e!s}"
            raise InvalidImageError(mssg) from e

    async def upload_image(self, file: UploadFile) -> UploadedImage:
        """
        Validate an uploaded image and store it.

        Raises:
            UnsupportedImageTypeError: If the MIME type is not accepted
            ImageTooLargeError: If the file exceeds the size limit
            InvalidImageError: If the bytes are not a decodable image
        """
        content_type = self._validate_image_type(file.content_type)
        file_data = await file.read()
        self._validate_image_size(file_data)
        self._validate_image_content(file_data)

        media_id = uuid4()
        stored = await self.storage.upload_media(
            folder=IMAGE_FOLDER,
            media_id=str(media_id),
            file_data=file_data,
            content_type=content_type,
        )
        logger.info(f"Stored image {media_id} ({len(file_data)} bytes) at {stored.key}")
        return UploadedImage(
            media_id=media_id,
            file_name=file.filename or f"{media_id}",
            content_type=content_type,
            size=len(file_data),
            stored=stored,
        )

    async def read(self, key: str) -> bytes | None:
        return await self.storage.read_media(key)

    async def delete(self, key: str) -> bool:
        deleted = await self.storage.delete_media(key)
        if not deleted:
            logger.warning(f"Object {key} was already absent from storage")
        return deleted
