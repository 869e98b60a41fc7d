"""Author profile and viewer account management."""

from logging import getLogger
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.errors.auth import InvalidCredentialsError
from app.errors.database import DuplicateEntryError, RecordNotFoundError
from app.managers.password_manager import hash_password, verify_password
from app.models import AuthorDB, ViewerDB
from app.repositories import AuthorRepository, ViewerRepository
from app.schemas.user import AuthorUpdate, PasswordChange, ViewerUpdate
from app.services.comment import CommentService
from app.services.image_file import ImageFileService
from app.services.media import MediaService

logger = file_logger(getLogger(__name__))


class AuthorService:
    """The single author's public profile and avatar."""

    def __init__(self, session: AsyncSession, media: MediaService) -> None:
        self.repo = AuthorRepository(session)
        self.images = ImageFileService(session, media)

    async def get(self) -> AuthorDB:
        author = await self.repo.get_single()
        if author is None:
            raise RecordNotFoundError(entity="Author")
        return author

    async def update(self, author_id: UUID, data: AuthorUpdate) -> AuthorDB:
        author = await self.repo.get_or_raise(author_id)
        if data.name is not None:
            author.name = data.name
        if data.bio is not None:
            author.bio = data.bio
        if "image_file" in data.model_fields_set:
            await self.images.sync_reference("author", author.id, author.image_file, data.image_file)
            author.image_file = data.image_file
        return await self.repo.save(author)

    async def update_image(self, author_id: UUID, image: UploadFile) -> AuthorDB:
        author = await self.repo.get_or_raise(author_id)
        new_image = await self.images.upload(image)
        await self.images.sync_reference("author", author.id, author.image_file, new_image.id)
        author.image_file = new_image.id
        return await self.repo.save(author)


class ViewerService:
    """Viewer accounts. A viewer may only change their own account."""

    def __init__(self, session: AsyncSession) -> None:
        self.repo = ViewerRepository(session)
        self.comments = CommentService(session)

    async def get(self, viewer_id: UUID) -> ViewerDB:
        return await self.repo.get_or_raise(viewer_id)

    async def get_all(self, page: int, limit: int) -> list[ViewerDB]:
        return await self.repo.get_all(page=page, limit=limit)

    async def update(self, viewer_id: UUID, data: ViewerUpdate) -> ViewerDB:
        viewer = await self.repo.get_or_raise(viewer_id)
        if data.username is not None and data.username != viewer.username:
            if await self.repo.exists_by_field("username", data.username, exclude_id=viewer.id):
                mssg = f"Username '{data.username}' is already taken"
                raise DuplicateEntryError(mssg)
            viewer.username = data.username
        if data.name is not None:
            viewer.name = data.name
        return await self.repo.save(viewer)

    async def confirm_password(self, viewer_id: UUID, password: str) -> None:
        """
        Raises:
            InvalidCredentialsError: If the password does not match
        """
        viewer = await self.repo.get_or_raise(viewer_id)
        if not await verify_password(password, viewer.password_hash):
            raise InvalidCredentialsError

    async def change_password(self, viewer_id: UUID, data: PasswordChange) -> None:
        await self.confirm_password(viewer_id, data.current_password)
        viewer = await self.repo.get_or_raise(viewer_id)
        viewer.password_hash = await hash_password(data.new_password)
        await self.repo.save(viewer)

    async def delete(self, viewer_id: UUID) -> None:
        """Delete a viewer together with their comments and the replies under them."""
        viewer = await self.repo.get_or_raise(viewer_id)
        removed = 0
        for comment_id in list(viewer.comments):
            removed += await self.comments.delete_if_present(comment_id)
        await self.repo.delete(viewer)
        logger.info(f"Viewer {viewer_id} deleted with {removed} comment(s)")
