"""
Base storage protocol for binary object operations.

Image binaries live outside the database; `ImageFileDB.storage_key` names
the object in whichever backend stored it.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class StoredMedia:
    """Where an uploaded object ended up."""

    key: str
    url: str


class StorageService(Protocol):
    """
    Protocol defining the interface for storage services.

    All storage implementations must implement these methods
    to ensure consistent behavior across different backends.
    """

    @abstractmethod
    async def upload_media(
        self,
        folder: str,
        media_id: str,
        file_data: bytes,
        content_type: str,
    ) -> StoredMedia:
        """
        Upload an object to storage.

        Args:
            folder: Storage folder (e.g., "image_files")
            media_id: Unique ID for the object
            file_data: Raw file bytes
            content_type: MIME type of the file

        Returns:
            StoredMedia: Storage key and public URL
        """
        ...

    @abstractmethod
    async def read_media(self, key: str) -> bytes | None:
        """
        Read an object's bytes.

        Returns:
            bytes | None: Object content, or None if it does not exist
        """
        ...

    @abstractmethod
    async def delete_media(self, key: str) -> bool:
        """
        Delete an object from storage.

        Returns:
            bool: True if an object was deleted, False if none existed
        """
        ...
