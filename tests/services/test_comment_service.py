# tests/services/test_comment_service.py
"""Tests for comment threads and the lists that mirror them."""

from uuid import uuid4

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from app.errors.auth import ForbiddenError
from app.errors.database import RecordNotFoundError
from app.errors.relations import DuplicateLikeError
from app.errors.validation import ValidationError
from app.models import BlogDB, CommentDB
from app.schemas.auth import Principal
from app.schemas.comment import CommentCreate, CommentUpdate, ReplyCreate
from app.services.comment import CommentService


@pytest.fixture
async def blog(session: AsyncSession, graph: dict) -> BlogDB:
    blog = BlogDB(
        author_id=graph["author"].id,
        title="Exploring Bali",
        slug="exploring-bali",
        content="<p>Rice terraces</p>",
    )
    session.add(blog)
    await session.flush()
    return blog


@pytest.fixture
def service(session: AsyncSession) -> CommentService:
    return CommentService(session)


async def thread(service: CommentService, graph: dict, blog: BlogDB) -> tuple[CommentDB, CommentDB]:
    comment = await service.create(
        graph["viewer_principal"],
        CommentCreate(blog_id=blog.id, content="Lovely photos"),
    )
    reply = await service.reply(graph["author_principal"], comment.id, ReplyCreate(content="Thanks"))
    return comment, reply


class TestCreate:
    @pytest.mark.asyncio
    async def test_top_level_comment_is_listed_on_blog_and_viewer(
        self,
        service: CommentService,
        graph: dict,
        blog: BlogDB,
    ) -> None:
        comment = await service.create(
            graph["viewer_principal"],
            CommentCreate(blog_id=blog.id, content="Lovely photos"),
        )

        assert comment.viewer_id == graph["viewer"].id
        assert comment.author_id is None
        assert blog.comments == [str(comment.id)]
        assert graph["viewer"].comments == [str(comment.id)]

    @pytest.mark.asyncio
    async def test_reply_is_listed_on_parent_only(
        self,
        service: CommentService,
        graph: dict,
        blog: BlogDB,
    ) -> None:
        comment, reply = await thread(service, graph, blog)

        assert reply.parent_comment == comment.id
        assert reply.blog_id == blog.id
        assert comment.replies == [str(reply.id)]
        assert blog.comments == [str(comment.id)]
        assert graph["author"].comments == [str(reply.id)]

    @pytest.mark.asyncio
    async def test_comment_on_missing_blog(self, service: CommentService, graph: dict) -> None:
        with pytest.raises(RecordNotFoundError):
            await service.create(
                graph["viewer_principal"],
                CommentCreate(blog_id=uuid4(), content="Hello"),
            )

    @pytest.mark.asyncio
    async def test_unknown_principal_is_rejected(
        self,
        service: CommentService,
        blog: BlogDB,
    ) -> None:
        ghost = Principal(id=uuid4(), username="ghost", role="viewer")

        with pytest.raises(RecordNotFoundError):
            await service.create(ghost, CommentCreate(blog_id=blog.id, content="Boo"))


class TestUpdate:
    @pytest.mark.asyncio
    async def test_owner_can_edit(self, service: CommentService, graph: dict, blog: BlogDB) -> None:
        comment, _ = await thread(service, graph, blog)

        updated = await service.update(
            graph["viewer_principal"],
            comment.id,
            CommentUpdate(content="Edited"),
        )

        assert updated.content == "Edited"

    @pytest.mark.asyncio
    async def test_other_viewer_is_forbidden(
        self,
        service: CommentService,
        graph: dict,
        blog: BlogDB,
    ) -> None:
        comment, _ = await thread(service, graph, blog)
        stranger = Principal(id=uuid4(), username="stranger", role="viewer")

        with pytest.raises(ForbiddenError):
            await service.update(stranger, comment.id, CommentUpdate(content="Mine now"))

    @pytest.mark.asyncio
    async def test_empty_update_is_rejected(
        self,
        service: CommentService,
        graph: dict,
        blog: BlogDB,
    ) -> None:
        comment, _ = await thread(service, graph, blog)

        with pytest.raises(ValidationError):
            await service.update(graph["viewer_principal"], comment.id, CommentUpdate())

    @pytest.mark.asyncio
    async def test_duplicate_likes_leave_the_comment_unchanged(
        self,
        service: CommentService,
        graph: dict,
        blog: BlogDB,
    ) -> None:
        comment, _ = await thread(service, graph, blog)
        user = uuid4()

        with pytest.raises(DuplicateLikeError):
            await service.update(
                graph["viewer_principal"],
                comment.id,
                CommentUpdate(content="Edited", likes=[user, user]),
            )

        assert comment.likes == []
        assert comment.content == "Lovely photos"

    @pytest.mark.asyncio
    async def test_toggle_like(self, service: CommentService, graph: dict, blog: BlogDB) -> None:
        comment, _ = await thread(service, graph, blog)
        user = graph["viewer"].id

        assert (await service.toggle_like(comment.id, user)).likes == [str(user)]
        assert (await service.toggle_like(comment.id, user)).likes == []


class TestDelete:
    @pytest.mark.asyncio
    async def test_deleting_a_comment_removes_its_replies(
        self,
        session: AsyncSession,
        service: CommentService,
        graph: dict,
        blog: BlogDB,
    ) -> None:
        comment, reply = await thread(service, graph, blog)

        removed = await service.delete(graph["viewer_principal"], comment.id)

        assert removed == 2
        assert blog.comments == []
        assert graph["viewer"].comments == []
        assert graph["author"].comments == []
        assert await session.get(CommentDB, reply.id) is None

    @pytest.mark.asyncio
    async def test_deleting_a_reply_keeps_the_parent(
        self,
        service: CommentService,
        graph: dict,
        blog: BlogDB,
    ) -> None:
        comment, reply = await thread(service, graph, blog)

        removed = await service.delete(graph["author_principal"], reply.id)

        assert removed == 1
        assert comment.replies == []
        assert blog.comments == [str(comment.id)]
        assert graph["author"].comments == []

    @pytest.mark.asyncio
    async def test_author_may_delete_any_comment(
        self,
        service: CommentService,
        graph: dict,
        blog: BlogDB,
    ) -> None:
        comment, _ = await thread(service, graph, blog)

        assert await service.delete(graph["author_principal"], comment.id) == 2

    @pytest.mark.asyncio
    async def test_delete_if_present_tolerates_missing(self, service: CommentService) -> None:
        assert await service.delete_if_present(uuid4()) == 0
