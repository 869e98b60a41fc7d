"""
Local filesystem storage implementation.

Files are stored under the configured uploads directory. Suitable for
development and testing.
"""

from pathlib import Path

import aiofiles
import aiofiles.os

from app.configs.settings import settings
from app.services.storage.base import StoredMedia

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
}


class LocalStorage:
    """Stores objects as files below `settings.UPLOADS_DIR`."""

    def __init__(self, uploads_dir: Path | None = None) -> None:
        self.uploads_dir = uploads_dir or settings.UPLOADS_DIR

    def _path(self, key: str) -> Path:
        path = (self.uploads_dir / key).resolve()
        if not path.is_relative_to(self.uploads_dir.resolve()):
            mssg = f"Storage key escapes the uploads directory: {key}"
            raise ValueError(mssg)
        return path

    async def upload_media(
        self,
        folder: str,
        media_id: str,
        file_data: bytes,
        content_type: str,
    ) -> StoredMedia:
        """
        Write an object to `uploads/{folder}/{media_id}.{ext}`.

        Returns:
            StoredMedia: Relative key and URL path for static serving
        """
        extension = EXTENSIONS.get(content_type, "bin")
        key = f"{folder}/{media_id}.{extension}"
        file_path = self._path(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(file_path, "wb") as f:
            await f.write(file_data)

        return StoredMedia(key=key, url=f"/uploads/{key}")

    async def read_media(self, key: str) -> bytes | None:
        file_path = self._path(key)
        if not file_path.exists():
            return None
        async with aiofiles.open(file_path, "rb") as f:
            return await f.read()

    async def delete_media(self, key: str) -> bool:
        file_path = self._path(key)
        if not file_path.exists():
            return False
        await aiofiles.os.remove(file_path)
        return True
