# tests/services/conftest.py
"""Fixtures for service-level tests. Everything is flushed into the `session` fixture."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import AuthorDB, CategoryDB, ImageFileDB, TagDB, ViewerDB
from app.schemas.auth import Principal
from app.services.media import MediaService


def fake_upload(
    data: bytes,
    content_type: str = "image/jpeg",
    filename: str = "cover.jpg",
) -> MagicMock:
    file = MagicMock()
    file.content_type = content_type
    file.filename = filename
    file.read = AsyncMock(return_value=data)
    return file


@pytest.fixture
def upload_file() -> Callable[..., MagicMock]:
    return fake_upload


@pytest.fixture
def media(storage: MagicMock) -> MediaService:
    return MediaService(storage=storage)


@pytest.fixture
async def graph(session: AsyncSession) -> dict:
    """An author, a viewer, two categories, two tags and an image, flushed."""
    author = AuthorDB(
        name="Ada Writer",
        email="ada@example.com",
        username="ada",
        password_hash="hash",
    )
    viewer = ViewerDB(name="Val Reader", username="valreader", password_hash="hash")
    travel = CategoryDB(name="Travel", slug="travel")
    food = CategoryDB(name="Food", slug="food")
    python = TagDB(name="python", slug="python")
    web = TagDB(name="web", slug="web")
    image = ImageFileDB(
        file_name="cover.jpg",
        file_type="image/jpeg",
        url="https://cdn.example.com/image_files/cover",
        storage_key="image_files/cover",
    )
    session.add_all([author, viewer, travel, food, python, web, image])
    await session.flush()
    return {
        "author": author,
        "viewer": viewer,
        "travel": travel,
        "food": food,
        "python": python,
        "web": web,
        "image": image,
        "author_principal": Principal(id=author.id, username=author.username, role="author"),
        "viewer_principal": Principal(id=viewer.id, username=viewer.username, role="viewer"),
    }
