# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from tempfile import mkdtemp

# Settings are read once at import time, so the test environment must be in
# place before anything under `app` is imported.
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["STORAGE_PROVIDER"] = "local"
os.environ["UPLOADS_DIR"] = mkdtemp(prefix="blog-uploads-")
os.environ["LIMITER_ENABLED"] = "false"
os.environ["ARGON2_MEMORY_COST"] = "1024"
os.environ["ARGON2_TIME_COST"] = "1"
os.environ["ARGON2_PARALLELISM"] = "1"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from io import BytesIO  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from PIL import Image  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

import app.models  # noqa: E402, F401
from app.db import get_session, transaction  # noqa: E402
from app.dependencies import get_storage  # noqa: E402
from app.main import app  # noqa: E402
from app.managers.rate_limiter import limiter  # noqa: E402
from app.managers.token_manager import create_access_token  # noqa: E402
from app.models import AuthorDB, ImageFileDB, ViewerDB  # noqa: E402
from app.services.storage import StorageService, StoredMedia  # noqa: E402

type Seeder = Callable[..., Awaitable[tuple[Any, ...]]]
type Fetcher = Callable[[type[SQLModel], UUID], Awaitable[Any]]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A session for service-level tests. Writes are flushed, never committed."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def seed(session_maker: async_sessionmaker[AsyncSession]) -> Seeder:
    """Insert and commit records in their own session."""

    async def _seed(*records: SQLModel) -> tuple[Any, ...]:
        async with session_maker() as session:
            session.add_all(records)
            await session.commit()
        return records

    return _seed


@pytest.fixture
def fetch(session_maker: async_sessionmaker[AsyncSession]) -> Fetcher:
    """Load the committed state of a record in a fresh session."""

    async def _fetch(model: type[SQLModel], record_id: UUID) -> Any:
        async with session_maker() as session:
            return await session.get(model, record_id)

    return _fetch


def make_image_bytes(fmt: str = "JPEG") -> bytes:
    mode = "RGB" if fmt == "JPEG" else "RGBA"
    img = Image.new(mode, (64, 64), color="red")
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def valid_jpeg_bytes() -> bytes:
    """Create valid JPEG image bytes."""
    return make_image_bytes("JPEG")


@pytest.fixture
def valid_png_bytes() -> bytes:
    """Create valid PNG image bytes."""
    return make_image_bytes("PNG")


@pytest.fixture
def storage(valid_jpeg_bytes: bytes) -> MagicMock:
    """Object store double recording uploads and deletes."""
    mock = MagicMock(spec=StorageService)

    async def upload_media(
        folder: str,
        media_id: str,
        file_data: bytes,
        content_type: str,
    ) -> StoredMedia:
        key = f"{folder}/{media_id}"
        return StoredMedia(key=key, url=f"https://cdn.example.com/{key}")

    mock.upload_media = AsyncMock(side_effect=upload_media)
    mock.read_media = AsyncMock(return_value=valid_jpeg_bytes)
    mock.delete_media = AsyncMock(return_value=True)
    return mock


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    storage: MagicMock,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the test database and the storage double."""

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with transaction(session_maker) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_storage] = lambda: storage
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides = {}


@pytest.fixture
async def author(seed: Seeder) -> AuthorDB:
    (author,) = await seed(
        AuthorDB(
            name="Ada Writer",
            email="ada@example.com",
            username="ada",
            password_hash="$argon2id$v=19$m=65536,t=3,p=4$somehash",
        ),
    )
    return author


@pytest.fixture
async def viewer(seed: Seeder) -> ViewerDB:
    (viewer,) = await seed(
        ViewerDB(
            name="Val Reader",
            username="valreader",
            password_hash="$argon2id$v=19$m=65536,t=3,p=4$somehash",
        ),
    )
    return viewer


@pytest.fixture
async def other_viewer(seed: Seeder) -> ViewerDB:
    (viewer,) = await seed(
        ViewerDB(
            name="Otto Reader",
            username="ottoreader",
            password_hash="$argon2id$v=19$m=65536,t=3,p=4$somehash",
        ),
    )
    return viewer


@pytest.fixture
def author_headers(author: AuthorDB) -> dict[str, str]:
    token = create_access_token(user_id=author.id, username=author.username, role="author")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def viewer_headers(viewer: ViewerDB) -> dict[str, str]:
    token = create_access_token(user_id=viewer.id, username=viewer.username, role="viewer")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_viewer_headers(other_viewer: ViewerDB) -> dict[str, str]:
    token = create_access_token(
        user_id=other_viewer.id,
        username=other_viewer.username,
        role="viewer",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def image(seed: Seeder) -> ImageFileDB:
    """An already-uploaded image nobody references yet."""
    (image,) = await seed(
        ImageFileDB(
            file_name="cover.jpg",
            file_type="image/jpeg",
            size=1024,
            url="https://cdn.example.com/image_files/cover",
            storage_key="image_files/cover",
        ),
    )
    return image
