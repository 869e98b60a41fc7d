# tests/relations/test_sync.py
"""Tests for back-reference synchronisation."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from app.errors.database import DatabaseConnectionError, RecordNotFoundError
from app.errors.relations import RelationSyncError
from app.models import TagDB
from app.repositories import TagRepository
from app.repositories.base import BaseRepository
from app.services.relations import (
    Relation,
    diff_ids,
    pull_ref,
    push_ref,
    sync_relation,
)


def tag(name: str, blogs: list[str] | None = None) -> TagDB:
    return TagDB(name=name, slug=name, blogs=blogs or [])


class TestDiffIds:
    def test_single_value_is_a_singleton_set(self) -> None:
        old, new = uuid4(), uuid4()

        diff = diff_ids(old, new)

        assert diff.added == {str(new)}
        assert diff.removed == {str(old)}

    def test_none_is_the_empty_set(self) -> None:
        value = uuid4()

        assert diff_ids(None, value).added == {str(value)}
        assert diff_ids(value, None).removed == {str(value)}
        assert not diff_ids(None, None).changed

    def test_order_and_representation_are_ignored(self) -> None:
        a, b = uuid4(), uuid4()

        diff = diff_ids([a, b], [str(b), str(a)])

        assert not diff.changed

    def test_malformed_id_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            diff_ids(["not-an-id"], [])


class TestRefLists:
    def test_push_does_not_duplicate(self) -> None:
        assert push_ref(["a"], "a") == ["a"]
        assert push_ref(["a"], "b") == ["a", "b"]

    def test_pull_removes_every_occurrence(self) -> None:
        assert pull_ref(["a", "b", "a"], "a") == ["b"]

    def test_helpers_return_new_lists(self) -> None:
        refs = ["a"]

        assert push_ref(refs, "a") is not refs
        assert pull_ref(refs, "b") is not refs

    def test_tagged_refs_compare_by_value(self) -> None:
        ref = {"kind": "blog", "id": "1"}

        assert pull_ref([{"kind": "blog", "id": "1"}], ref) == []


class TestSyncRelation:
    @pytest.mark.asyncio
    async def test_equal_sets_perform_no_reads_or_writes(self) -> None:
        related = MagicMock(spec=BaseRepository)
        related.get_by_id = AsyncMock()
        related.save = AsyncMock()
        a, b = uuid4(), uuid4()

        diff = await sync_relation([a, b], [b, a], related, str(uuid4()))

        assert not diff.changed
        related.get_by_id.assert_not_awaited()
        related.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_moves_owner_between_related_records(self, session: AsyncSession) -> None:
        owner = str(uuid4())
        a, b, c = tag("a", [owner]), tag("b", [owner, "other"]), tag("c")
        session.add_all([a, b, c])
        await session.flush()
        repo = TagRepository(session)

        diff = await sync_relation([a.id, b.id], [b.id, c.id], repo, owner)

        assert diff.removed == {str(a.id)}
        assert diff.added == {str(c.id)}
        assert owner not in (await repo.get_or_raise(a.id)).blogs
        assert (await repo.get_or_raise(b.id)).blogs == [owner, "other"]
        assert (await repo.get_or_raise(c.id)).blogs == [owner]

    @pytest.mark.asyncio
    async def test_missing_record_is_skipped_on_removal(self, session: AsyncSession) -> None:
        owner = str(uuid4())
        kept = tag("kept")
        session.add(kept)
        await session.flush()

        diff = await sync_relation([uuid4()], [kept.id], TagRepository(session), owner)

        assert len(diff.removed) == 1
        assert kept.blogs == [owner]

    @pytest.mark.asyncio
    async def test_missing_record_is_ignored_on_lenient_add(self, session: AsyncSession) -> None:
        missing = uuid4()

        diff = await sync_relation(None, [missing], TagRepository(session), str(uuid4()))

        assert diff.added == {str(missing)}

    @pytest.mark.asyncio
    async def test_missing_record_raises_on_strict_add(self, session: AsyncSession) -> None:
        with pytest.raises(RecordNotFoundError) as exc_info:
            await sync_relation(
                None,
                [uuid4()],
                TagRepository(session),
                str(uuid4()),
                strict=True,
            )

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail.startswith("Tag with ID")

    @pytest.mark.asyncio
    async def test_failed_write_raises_relation_sync_error(self) -> None:
        record = tag("broken")
        related = MagicMock(spec=BaseRepository)
        related.entity = "Tag"
        related.get_by_id = AsyncMock(return_value=record)
        related.save = AsyncMock(side_effect=DatabaseConnectionError())

        with pytest.raises(RelationSyncError) as exc_info:
            await sync_relation(None, [record.id], related, str(uuid4()))

        assert exc_info.value.relation == "Tag.blogs"
        assert exc_info.value.related_id == str(record.id)
        assert exc_info.value.status_code == 500


class TestRelation:
    @pytest.mark.asyncio
    async def test_sync_uses_configured_back_ref(self, session: AsyncSession) -> None:
        owner = str(uuid4())
        target = tag("target")
        session.add(target)
        await session.flush()
        relation = Relation("tags", TagRepository(session), owner)

        await relation.sync(None, [target.id])
        await relation.sync([target.id], [target.id])

        assert target.blogs == [owner]


@pytest.mark.asyncio
async def test_concurrent_edits_can_lose_a_back_reference(
    session_maker: async_sessionmaker[AsyncSession],
    seed,  # noqa: ANN001
    fetch,  # noqa: ANN001
) -> None:
    """
    Two requests that read the same tag before either writes race on `blogs`.

    Each request is atomic on its own, but the later commit is computed from
    a stale read and overwrites the earlier one. This is a known window.
    """
    (shared,) = await seed(tag("shared"))
    first_blog, second_blog = str(uuid4()), str(uuid4())

    async with session_maker() as first:
        stale = list((await first.get(TagDB, shared.id)).blogs)

    async with session_maker() as second:
        record = await second.get(TagDB, shared.id)
        record.blogs = push_ref(record.blogs, second_blog)
        await second.commit()

    async with session_maker() as first_write:
        record = await first_write.get(TagDB, shared.id)
        record.blogs = push_ref(stale, first_blog)
        await first_write.commit()

    assert (await fetch(TagDB, shared.id)).blogs == [first_blog]
