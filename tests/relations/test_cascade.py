# tests/relations/test_cascade.py
"""Tests for delete-time reconciliation of back-references."""

from uuid import uuid4

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from app.errors.relations import ReferencedRecordError
from app.models import AuthorDB, BlogDB, CategoryDB, ImageFileDB, TagDB
from app.repositories import (
    AuthorRepository,
    BlogRepository,
    CategoryRepository,
    TagRepository,
)
from app.services.relations import (
    Relation,
    cascade_delete_refs,
    ensure_unreferenced,
    image_ref,
    release_image_references,
)


class TestEnsureUnreferenced:
    def test_empty_back_refs_pass(self) -> None:
        ensure_unreferenced(CategoryDB(name="Travel", slug="travel"), "Category")

    def test_non_empty_back_refs_are_refused(self) -> None:
        category = CategoryDB(name="Travel", slug="travel", blogs=[str(uuid4())])

        with pytest.raises(ReferencedRecordError) as exc_info:
            ensure_unreferenced(category, "Category")

        assert exc_info.value.status_code == 400
        assert exc_info.value.referenced_by == 1
        assert exc_info.value.detail == (
            "You must remove all the associated blogs before deleting this category"
        )


def test_image_ref_is_tagged_with_kind() -> None:
    owner = uuid4()

    assert image_ref("author", owner) == {"kind": "author", "id": str(owner)}


@pytest.mark.asyncio
async def test_cascade_removes_owner_from_every_relation(session: AsyncSession) -> None:
    blog_id = str(uuid4())
    first, second = TagDB(name="a", slug="a", blogs=[blog_id]), TagDB(name="b", slug="b")
    second.blogs = [blog_id, "another"]
    category = CategoryDB(name="Travel", slug="travel", blogs=[blog_id])
    session.add_all([first, second, category])
    await session.flush()

    snapshot = {"tags": [str(first.id), str(second.id)], "category": category.id}
    applied = await cascade_delete_refs(
        snapshot,
        [
            Relation("category", CategoryRepository(session), blog_id),
            Relation("tags", TagRepository(session), blog_id),
        ],
    )

    assert applied["tags"].removed == {str(first.id), str(second.id)}
    assert applied["category"].removed == {str(category.id)}
    assert first.blogs == []
    assert second.blogs == ["another"]
    assert category.blogs == []


@pytest.mark.asyncio
async def test_cascade_with_no_references_is_a_no_op(session: AsyncSession) -> None:
    applied = await cascade_delete_refs(
        {"category": None, "tags": []},
        [
            Relation("category", CategoryRepository(session), str(uuid4())),
            Relation("tags", TagRepository(session), str(uuid4())),
        ],
    )

    assert not any(diff.changed for diff in applied.values())


@pytest.mark.asyncio
async def test_release_image_references_clears_each_owner(session: AsyncSession) -> None:
    author = AuthorDB(
        name="Ada",
        email="ada@example.com",
        username="ada",
        password_hash="hash",
    )
    image = ImageFileDB(
        file_name="cover.jpg",
        file_type="image/jpeg",
        url="https://cdn.example.com/cover",
        storage_key="image_files/cover",
    )
    session.add_all([author, image])
    await session.flush()

    blog = BlogDB(
        author_id=author.id,
        title="Crater",
        slug="crater",
        content="...",
        image_file=image.id,
    )
    category = CategoryDB(name="Travel", slug="travel", image_file=image.id)
    author.image_file = image.id
    session.add_all([blog, category])
    await session.flush()

    image.referenced_docs = [
        image_ref("blog", blog.id),
        image_ref("category", category.id),
        image_ref("author", author.id),
        image_ref("blog", uuid4()),
    ]
    owners = {
        "blog": BlogRepository(session),
        "author": AuthorRepository(session),
        "category": CategoryRepository(session),
    }

    released = await release_image_references(image, owners)

    assert released == 3
    assert blog.image_file is None
    assert category.image_file is None
    assert author.image_file is None


@pytest.mark.asyncio
async def test_release_skips_owner_already_pointing_elsewhere(session: AsyncSession) -> None:
    other_image = uuid4()
    category = CategoryDB(name="Food", slug="food", image_file=other_image)
    session.add(category)
    await session.flush()
    image = ImageFileDB(
        file_name="old.jpg",
        file_type="image/jpeg",
        url="https://cdn.example.com/old",
        storage_key="image_files/old",
        referenced_docs=[image_ref("category", category.id)],
    )

    released = await release_image_references(
        image,
        {"category": CategoryRepository(session)},
    )

    assert released == 0
    assert category.image_file == other_image
