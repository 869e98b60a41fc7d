"""
Cloudinary storage implementation.

Production backend with CDN delivery and automatic image optimisation.
"""

import asyncio
from functools import partial

import cloudinary
import cloudinary.uploader
import cloudinary.utils
from httpx import AsyncClient, HTTPError

from app.configs.settings import settings
from app.errors.upload import StorageError
from app.services.storage.base import StoredMedia


class CloudinaryStorage:
    """Stores objects in Cloudinary under `settings.CLOUDINARY_FOLDER`."""

    def __init__(self) -> None:
        """Initialize Cloudinary with configured credentials."""
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )
        self.root = settings.CLOUDINARY_FOLDER

    async def upload_media(
        self,
        folder: str,
        media_id: str,
        file_data: bytes,
        content_type: str,
    ) -> StoredMedia:
        """
        Upload an image to Cloudinary.

        Returns:
            StoredMedia: Cloudinary public ID and secure URL
        """
        public_id = f"{self.root}/{folder}/{media_id}"

        # Run blocking Cloudinary upload in thread pool
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None,
            partial(
                cloudinary.uploader.upload,
                file_data,
                public_id=public_id,
                overwrite=True,
                resource_type="image",
                transformation=[{"quality": "auto:good", "fetch_format": "auto"}],
            ),
        )

        return StoredMedia(key=result["public_id"], url=result["secure_url"])

    async def read_media(self, key: str) -> bytes | None:
        url, _ = cloudinary.utils.cloudinary_url(key, resource_type="image", secure=True)
        try:
            async with AsyncClient(timeout=10.0) as client:
                response = await client.get(url)
        except HTTPError as e:
            mssg = f"Failed to fetch {key} from Cloudinary"
            raise StorageError(mssg) from e
        if response.status_code == 404:
            return None
        if response.is_error:
            mssg = f"Cloudinary returned {response.status_code} for {key}"
            raise StorageError(mssg)
        return response.content

    async def delete_media(self, key: str) -> bool:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None,
            partial(cloudinary.uploader.destroy, key, resource_type="image"),
        )
        return result.get("result") == "ok"
