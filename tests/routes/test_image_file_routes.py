# tests/routes/test_image_file_routes.py
"""Image file route tests."""

import json
from collections.abc import AsyncGenerator
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db import get_session, transaction
from app.main import app
from app.models import AuthorDB, BlogDB, CategoryDB, ImageFileDB


@pytest.mark.asyncio
async def test_upload_with_credit(
    client: AsyncClient,
    author_headers: dict[str, str],
    valid_png_bytes: bytes,
) -> None:
    credit = {"authorName": "Jane Doe", "sourceURL": "https://unsplash.com/photos/xyz"}

    response = await client.post(
        "/image-files/upload",
        files={"uploadImage": ("sunset.png", valid_png_bytes, "image/png")},
        data={"credit": json.dumps(credit)},
        headers=author_headers,
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["fileName"] == "sunset.png"
    assert body["fileType"] == "image/png"
    assert body["credit"]["authorName"] == "Jane Doe"
    assert body["referencedDocs"] == []


@pytest.mark.asyncio
async def test_malformed_credit_is_a_validation_error(
    client: AsyncClient,
    author_headers: dict[str, str],
    storage: MagicMock,
    valid_png_bytes: bytes,
) -> None:
    response = await client.post(
        "/image-files/upload",
        files={"uploadImage": ("sunset.png", valid_png_bytes, "image/png")},
        data={"credit": json.dumps({"sourceURL": "not a url"})},
        headers=author_headers,
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "credit.sourceURL"
    storage.upload_media.assert_not_called()


@pytest.mark.asyncio
async def test_source_returns_bytes_with_content_type(
    client: AsyncClient,
    image: ImageFileDB,
    valid_jpeg_bytes: bytes,
) -> None:
    response = await client.get(f"/image-files/{image.id}/source")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    assert response.content == valid_jpeg_bytes


@pytest.mark.asyncio
async def test_unknown_image_is_not_found(client: AsyncClient) -> None:
    response = await client.get(f"/image-files/{uuid4()}/doc")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_clears_every_reference_and_binary_once(
    client: AsyncClient,
    author_headers: dict[str, str],
    author: AuthorDB,
    image: ImageFileDB,
    storage: MagicMock,
    fetch,  # noqa: ANN001
) -> None:
    category = await client.post(
        "/categories",
        json={"name": "Volcanoes", "imageFile": str(image.id)},
        headers=author_headers,
    )
    blog = await client.post(
        "/blogs/publish",
        data={"title": "Crater", "content": "<p>...</p>", "existingImageId": str(image.id)},
        headers=author_headers,
    )
    profile = await client.put(
        "/author/update",
        json={"imageFile": str(image.id)},
        headers=author_headers,
    )
    assert {category.status_code, blog.status_code, profile.status_code} <= {200, 201}
    assert len((await fetch(ImageFileDB, image.id)).referenced_docs) == 3

    response = await client.delete(f"/image-files/{image.id}/doc", headers=author_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Image deleted, 3 reference(s) cleared"}
    assert (await fetch(CategoryDB, UUID(category.json()["id"]))).image_file is None
    assert (await fetch(BlogDB, UUID(blog.json()["id"]))).image_file is None
    assert (await fetch(AuthorDB, author.id)).image_file is None
    assert await fetch(ImageFileDB, image.id) is None
    storage.delete_media.assert_awaited_once_with(image.storage_key)


@pytest.mark.asyncio
async def test_viewer_cannot_delete_images(
    client: AsyncClient,
    viewer_headers: dict[str, str],
    image: ImageFileDB,
    storage: MagicMock,
) -> None:
    response = await client.delete(f"/image-files/{image.id}/doc", headers=viewer_headers)

    assert response.status_code == 403
    storage.delete_media.assert_not_called()


@pytest.mark.asyncio
async def test_credit_update(
    client: AsyncClient,
    author_headers: dict[str, str],
    image: ImageFileDB,
) -> None:
    response = await client.put(
        f"/image-files/{image.id}/update",
        json={"credit": {"sourceName": "Unsplash"}},
        headers=author_headers,
    )

    assert response.status_code == 200
    assert response.json()["credit"]["sourceName"] == "Unsplash"


class CommitFailingSession(AsyncSession):
    async def commit(self) -> None:
        raise OperationalError("COMMIT", {}, Exception("database is locked"))


@pytest.mark.asyncio
async def test_failed_commit_keeps_binary_and_references(
    client: AsyncClient,
    author_headers: dict[str, str],
    image: ImageFileDB,
    storage: MagicMock,
    engine: AsyncEngine,
    fetch,  # noqa: ANN001
) -> None:
    category = await client.post(
        "/categories",
        json={"name": "Volcanoes", "imageFile": str(image.id)},
        headers=author_headers,
    )
    assert category.status_code == 201, category.text
    category_id = UUID(category.json()["id"])
    failing_maker = async_sessionmaker(
        engine,
        class_=CommitFailingSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async def failing_get_session() -> AsyncGenerator[AsyncSession]:
        async with transaction(failing_maker) as session:
            yield session

    app.dependency_overrides[get_session] = failing_get_session
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app, raise_app_exceptions=False),
    ) as failing_client:
        await failing_client.delete(f"/image-files/{image.id}/doc", headers=author_headers)

    storage.delete_media.assert_not_called()
    stored = await fetch(ImageFileDB, image.id)
    assert stored is not None
    assert stored.referenced_docs == [{"kind": "category", "id": str(category_id)}]
    assert (await fetch(CategoryDB, category_id)).image_file == image.id
