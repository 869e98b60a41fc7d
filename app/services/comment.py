"""Comment and reply service."""

from logging import getLogger
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.errors.auth import ForbiddenError
from app.errors.validation import ValidationError
from app.models.blog import BlogDB
from app.models.comment import CommentDB
from app.repositories import (
    AuthorRepository,
    BlogRepository,
    CommentRepository,
    ViewerRepository,
)
from app.schemas.auth import Principal
from app.schemas.comment import CommentCreate, CommentUpdate, ReplyCreate
from app.services.relations import (
    Relation,
    cascade_delete_refs,
    replace_likes,
    toggle_like,
)
from app.utils.ids import id_str

logger = file_logger(getLogger(__name__))


class CommentService:
    """
    Create, edit and delete comments and replies.

    A comment id is mirrored in the blog's `comments` (top-level only), in
    the parent's `replies` (replies only) and in the commenting principal's
    `comments`.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.repo = CommentRepository(session)
        self.blogs = BlogRepository(session)
        self.authors = AuthorRepository(session)
        self.viewers = ViewerRepository(session)

    def _principal_relation(self, comment: CommentDB) -> tuple[str, Relation]:
        owner = id_str(comment.id)
        if comment.author_id is not None:
            return "author_id", Relation("author_id", self.authors, owner, "comments")
        return "viewer_id", Relation("viewer_id", self.viewers, owner, "comments")

    def _relations(self, comment: CommentDB, *, include_thread: bool = True) -> list[Relation]:
        """Every list that mirrors `comment`."""
        owner = id_str(comment.id)
        relations = [self._principal_relation(comment)[1]]
        if include_thread:
            if comment.parent_comment is None:
                relations.append(Relation("blog_id", self.blogs, owner, "comments"))
            else:
                relations.append(Relation("parent_comment", self.repo, owner, "replies"))
        return relations

    def _authorise(self, principal: Principal, comment: CommentDB) -> None:
        if principal.is_author or comment.principal_id == principal.id:
            return
        mssg = "You can only change your own comments"
        raise ForbiddenError(mssg)

    async def _insert(self, comment: CommentDB) -> CommentDB:
        """Save a new comment and push its id into every mirroring list."""
        comment = await self.repo.save(comment)
        snapshot = comment.model_dump()
        for relation in self._relations(comment):
            await relation.sync(None, snapshot[relation.field], strict=True)
        return comment

    def _new_comment(
        self,
        principal: Principal,
        blog_id: UUID,
        content: str,
        parent: UUID | None = None,
    ) -> CommentDB:
        return CommentDB(
            content=content,
            blog_id=blog_id,
            parent_comment=parent,
            author_id=principal.id if principal.is_author else None,
            viewer_id=None if principal.is_author else principal.id,
        )

    async def create(self, principal: Principal, data: CommentCreate) -> CommentDB:
        """
        Add a top-level comment to a blog.

        Raises:
            RecordNotFoundError: If the blog or the principal does not exist
        """
        await self.blogs.get_or_raise(data.blog_id)
        return await self._insert(self._new_comment(principal, data.blog_id, data.content))

    async def reply(
        self,
        principal: Principal,
        parent_id: UUID,
        data: ReplyCreate,
    ) -> CommentDB:
        """
        Reply to an existing comment on the same blog.

        Raises:
            RecordNotFoundError: If the parent comment or its blog does not exist
        """
        parent = await self.repo.get_or_raise(parent_id)
        await self.blogs.get_or_raise(parent.blog_id)
        reply = self._new_comment(principal, parent.blog_id, data.content, parent.id)
        return await self._insert(reply)

    async def get(self, comment_id: UUID) -> CommentDB:
        return await self.repo.get_or_raise(comment_id)

    async def get_all(
        self,
        page: int,
        limit: int,
        filters: dict[str, Any] | None = None,
    ) -> list[CommentDB]:
        return await self.repo.get_all(page=page, limit=limit, filters=filters, sort="oldest")

    async def get_replies(self, comment_id: UUID) -> list[CommentDB]:
        parent = await self.repo.get_or_raise(comment_id)
        return await self.repo.get_many(parent.replies)

    async def update(
        self,
        principal: Principal,
        comment_id: UUID,
        data: CommentUpdate,
    ) -> CommentDB:
        """
        Edit a comment's text and/or replace its likes array.

        Raises:
            RecordNotFoundError: If the comment does not exist
            ForbiddenError: If the principal neither wrote the comment nor is the author
            DuplicateLikeError: If the submitted likes contain a duplicate
        """
        comment = await self.repo.get_or_raise(comment_id)
        self._authorise(principal, comment)

        if not data.model_fields_set:
            mssg = "Nothing to update"
            raise ValidationError(mssg)

        if data.likes is not None:
            comment = await replace_likes(self.repo, comment.id, data.likes)
        if data.content is not None:
            comment.content = data.content
            comment = await self.repo.save(comment)
        return comment

    async def toggle_like(self, comment_id: UUID, user_id: UUID) -> CommentDB:
        return await toggle_like(self.repo, comment_id, user_id)

    async def _delete_thread(self, comment: CommentDB, *, include_thread: bool) -> int:
        """Delete a comment and its replies. Returns the number of comments removed."""
        removed = 0
        for reply in await self.repo.get_many(comment.replies):
            removed += await self._delete_thread(reply, include_thread=False)

        snapshot = comment.model_dump()
        await cascade_delete_refs(snapshot, self._relations(comment, include_thread=include_thread))
        await self.repo.delete(comment)
        return removed + 1

    async def delete(self, principal: Principal, comment_id: UUID) -> int:
        """
        Delete a comment or reply together with its replies.

        Raises:
            RecordNotFoundError: If the comment does not exist
            ForbiddenError: If the principal neither wrote the comment nor is the author
        """
        comment = await self.repo.get_or_raise(comment_id)
        self._authorise(principal, comment)
        removed = await self._delete_thread(comment, include_thread=True)
        logger.info(f"Deleted comment {comment_id} and {removed - 1} repl(ies)")
        return removed

    async def delete_for_blog(self, blog: BlogDB) -> int:
        """
        Delete every comment on a blog that is itself being deleted.

        Only the commenting principals' lists are updated; the blog and the
        parents go away with it.
        """
        removed = 0
        for comment in await self.repo.get_by_blog(blog.id):
            field, relation = self._principal_relation(comment)
            await relation.sync(getattr(comment, field), None)
            await self.repo.delete(comment)
            removed += 1
        return removed

    async def delete_if_present(self, comment_id: UUID | str) -> int:
        """Delete a comment thread unless an earlier cascade already removed it."""
        comment = await self.repo.get_by_id(comment_id)
        if comment is None:
            return 0
        return await self._delete_thread(comment, include_thread=True)
