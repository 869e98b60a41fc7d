# tests/services/test_taxonomy_services.py
"""Tests for categories and tags."""

from uuid import uuid4

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from app.errors.database import DuplicateEntryError, RecordNotFoundError
from app.errors.relations import ReferencedRecordError
from app.models import BlogDB, CategoryDB, TagDB
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.schemas.tag import TagCreate, TagUpdate
from app.services.category import CategoryService
from app.services.media import MediaService
from app.services.relations import image_ref
from app.services.tag import TagService


@pytest.fixture
def categories(session: AsyncSession, media: MediaService) -> CategoryService:
    return CategoryService(session, media)


@pytest.fixture
def tags(session: AsyncSession) -> TagService:
    return TagService(session)


class TestCategoryService:
    @pytest.mark.asyncio
    async def test_create_derives_the_slug(self, categories: CategoryService) -> None:
        category = await categories.create(CategoryCreate(name="  Street Food "))

        assert category.name == "Street Food"
        assert category.slug == "street-food"
        assert category.blogs == []

    @pytest.mark.asyncio
    async def test_names_are_unique_ignoring_case(
        self,
        categories: CategoryService,
        graph: dict,
    ) -> None:
        with pytest.raises(DuplicateEntryError):
            await categories.create(CategoryCreate(name="TRAVEL"))

    @pytest.mark.asyncio
    async def test_create_with_image_records_the_reference(
        self,
        categories: CategoryService,
        graph: dict,
    ) -> None:
        category = await categories.create(
            CategoryCreate(name="Hiking", image_file=graph["image"].id),
        )

        assert graph["image"].referenced_docs == [image_ref("category", category.id)]

    @pytest.mark.asyncio
    async def test_create_with_missing_image(self, categories: CategoryService) -> None:
        with pytest.raises(RecordNotFoundError):
            await categories.create(CategoryCreate(name="Hiking", image_file=uuid4()))

    @pytest.mark.asyncio
    async def test_rename_keeps_blogs(self, categories: CategoryService, graph: dict) -> None:
        travel = graph["travel"]
        travel.blogs = [str(uuid4())]

        updated = await categories.update(travel.id, CategoryUpdate(name="Journeys"))

        assert updated.slug == "journeys"
        assert len(updated.blogs) == 1

    @pytest.mark.asyncio
    async def test_delete_is_refused_while_blogs_remain(
        self,
        session: AsyncSession,
        categories: CategoryService,
        graph: dict,
    ) -> None:
        travel = graph["travel"]
        travel.blogs = [str(uuid4())]

        with pytest.raises(ReferencedRecordError) as exc_info:
            await categories.delete(travel.id)

        assert exc_info.value.detail == (
            "You must remove all the associated blogs before deleting this category"
        )
        assert await session.get(CategoryDB, travel.id) is travel

    @pytest.mark.asyncio
    async def test_delete_releases_the_image(
        self,
        session: AsyncSession,
        categories: CategoryService,
        graph: dict,
    ) -> None:
        category = await categories.create(
            CategoryCreate(name="Hiking", image_file=graph["image"].id),
        )

        await categories.delete(category.id)

        assert graph["image"].referenced_docs == []
        assert await session.get(CategoryDB, category.id) is None

    @pytest.mark.asyncio
    async def test_with_published_blogs(
        self,
        session: AsyncSession,
        categories: CategoryService,
        graph: dict,
    ) -> None:
        author_id = graph["author"].id
        session.add_all(
            [
                BlogDB(
                    author_id=author_id,
                    title="Live",
                    slug="live",
                    content="...",
                    category=graph["travel"].id,
                    is_published=True,
                ),
                BlogDB(
                    author_id=author_id,
                    title="Draft",
                    slug="draft",
                    content="...",
                    category=graph["food"].id,
                ),
            ],
        )
        await session.flush()

        result = await categories.get_with_published_blogs()

        assert [category.name for category in result] == ["Travel"]


class TestTagService:
    @pytest.mark.asyncio
    async def test_names_are_lower_cased(self, tags: TagService) -> None:
        tag = await tags.create(TagCreate(name="FastAPI"))

        assert tag.name == "fastapi"
        assert tag.slug == "fastapi"

    @pytest.mark.asyncio
    async def test_duplicate_name(self, tags: TagService, graph: dict) -> None:
        with pytest.raises(DuplicateEntryError):
            await tags.create(TagCreate(name="Python"))

    @pytest.mark.asyncio
    async def test_rename(self, tags: TagService, graph: dict) -> None:
        tag = await tags.update(graph["web"].id, TagUpdate(name="Web Dev"))

        assert tag.name == "web dev"
        assert tag.slug == "web-dev"

    @pytest.mark.asyncio
    async def test_delete_is_refused_while_blogs_remain(
        self,
        tags: TagService,
        graph: dict,
    ) -> None:
        graph["python"].blogs = [str(uuid4()), str(uuid4())]

        with pytest.raises(ReferencedRecordError) as exc_info:
            await tags.delete(graph["python"].id)

        assert exc_info.value.referenced_by == 2
        assert exc_info.value.detail.endswith("deleting this tag")

    @pytest.mark.asyncio
    async def test_unused_tag_is_deleted(
        self,
        session: AsyncSession,
        tags: TagService,
        graph: dict,
    ) -> None:
        await tags.delete(graph["web"].id)

        assert await session.get(TagDB, graph["web"].id) is None
