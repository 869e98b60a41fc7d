"""Blog service: publishing workflow and blog-side relation maintenance."""

from logging import getLogger
from uuid import UUID, uuid4

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.configs import file_logger
from app.errors.database import DuplicateEntryError, RecordNotFoundError
from app.errors.validation import ValidationError
from app.models.blog import BlogDB
from app.repositories import BlogRepository, CategoryRepository, TagRepository
from app.schemas.blog import BlogCreate, BlogUpdate, PublishAction
from app.services.comment import CommentService
from app.services.image_file import ImageFileService
from app.services.media import MediaService
from app.services.relations import (
    Relation,
    cascade_delete_refs,
    normalise_likes,
    replace_likes,
    toggle_like,
)
from app.utils.helpers import slugify, utc_now
from app.utils.ids import id_str

logger = file_logger(getLogger(__name__))


def unique_ids(ids: list[UUID]) -> list[str]:
    """Canonical ids in first-seen order, without repeats."""
    return list(dict.fromkeys(id_str(item) for item in ids))


class BlogService:
    """
    Create, update, publish and delete blogs.

    Every change to `category`, `tags` or `image_file` is mirrored on the
    referenced records in the same transaction as the blog write.
    """

    def __init__(self, session: AsyncSession, media: MediaService) -> None:
        self.repo = BlogRepository(session)
        self.categories = CategoryRepository(session)
        self.tags = TagRepository(session)
        self.images = ImageFileService(session, media)
        self.comments = CommentService(session)

    def _category(self, blog_id: UUID) -> Relation:
        return Relation("category", self.categories, id_str(blog_id))

    def _tags(self, blog_id: UUID) -> Relation:
        return Relation("tags", self.tags, id_str(blog_id))

    async def _unique_slug(self, title: str, exclude_id: UUID | None = None) -> str:
        try:
            slug = slugify(title)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if await self.repo.exists_by_field("slug", slug, exclude_id=exclude_id):
            mssg = f"Blog with slug '{slug}' already exists"
            raise DuplicateEntryError(mssg)
        return slug

    @staticmethod
    def _apply_publish_action(blog: BlogDB, action: PublishAction) -> None:
        """`publish` makes the blog public; `save` keeps (or turns) it into a draft."""
        blog.is_published = action == "publish"
        if blog.is_published and blog.published_at is None:
            blog.published_at = utc_now()

    async def create(
        self,
        author_id: UUID,
        data: BlogCreate,
        action: PublishAction,
        image: UploadFile | None = None,
    ) -> BlogDB:
        """
        Create a blog with a cover image, category and tags.

        The category, the tags and an existing image must all exist. The
        uploaded image, if any, is stored last so a rejected reference does
        not leave an orphan binary.

        Raises:
            ValidationError: If neither an upload nor `existingImageId` is given
            RecordNotFoundError: If a referenced record does not exist
            DuplicateEntryError: If the title's slug is taken
        """
        if image is None and data.existing_image_id is None:
            mssg = "A blog needs an image: upload one or pass existingImageId"
            raise ValidationError(mssg)

        slug = await self._unique_slug(data.title)
        blog_id = uuid4()
        tags = unique_ids(data.tags)

        await self._category(blog_id).sync(None, data.category, strict=True)
        await self._tags(blog_id).sync(None, tags, strict=True)

        if image is not None:
            image_id = (await self.images.upload(image)).id
        else:
            image_id = data.existing_image_id
        await self.images.sync_reference("blog", blog_id, None, image_id, strict=True)

        blog = BlogDB(
            id=blog_id,
            author_id=author_id,
            title=data.title,
            slug=slug,
            content=data.content,
            image_file=image_id,
            category=data.category,
            tags=tags,
            is_private=data.is_private,
        )
        self._apply_publish_action(blog, action)
        blog = await self.repo.save(blog)
        logger.info(f"Blog {blog.id} created ({action})")
        return blog

    async def get(self, blog_id: UUID) -> BlogDB:
        return await self.repo.get_or_raise(blog_id)

    async def get_all(
        self,
        page: int,
        limit: int,
        filters: dict | None = None,
        sort: str = "latest",
    ) -> list[BlogDB]:
        return await self.repo.get_all(page=page, limit=limit, filters=filters, sort=sort)

    async def get_published(self, page: int, limit: int) -> list[BlogDB]:
        return await self.repo.get_published(page=page, limit=limit)

    async def count_published(self) -> int:
        return await self.repo.count_published()

    async def get_published_without_category(self) -> list[BlogDB]:
        return await self.repo.get_published_without_category()

    async def get_published_doc(
        self,
        blog_id: UUID | None = None,
        slug: str | None = None,
    ) -> BlogDB:
        """
        Find a public, published blog by id or slug.

        Raises:
            ValidationError: If neither `blog_id` nor `slug` is given
            RecordNotFoundError: If no public published blog matches
        """
        if blog_id is None and not slug:
            mssg = "Pass either id or slug"
            raise ValidationError(mssg)
        blog = await self.repo.get_by_id(blog_id) if blog_id else await self.repo.get_by_slug(slug)
        if blog is None or not blog.is_published or blog.is_private:
            raise RecordNotFoundError(entity="Blog")
        return blog

    async def update(
        self,
        blog_id: UUID,
        data: BlogUpdate,
        action: PublishAction,
    ) -> BlogDB:
        """
        Apply a partial update and mirror reference changes.

        References to records that no longer exist are accepted without a
        back-reference write.

        Raises:
            RecordNotFoundError: If the blog does not exist
            DuplicateLikeError: If `likes` contains a duplicate
            DuplicateEntryError: If the new title's slug is taken
        """
        blog = await self.repo.get_or_raise(blog_id)
        fields = data.model_fields_set

        # Reject a malformed likes array before anything is written
        if data.likes is not None:
            normalise_likes(data.likes)

        if data.title is not None and data.title != blog.title:
            blog.slug = await self._unique_slug(data.title, exclude_id=blog.id)
            blog.title = data.title
        if data.content is not None:
            blog.content = data.content
        if data.is_private is not None:
            blog.is_private = data.is_private

        if "category" in fields:
            await self._category(blog.id).sync(blog.category, data.category)
            blog.category = data.category
        if "tags" in fields:
            tags = unique_ids(data.tags or [])
            await self._tags(blog.id).sync(blog.tags, tags)
            blog.tags = tags
        if "image_file" in fields:
            await self.images.sync_reference("blog", blog.id, blog.image_file, data.image_file)
            blog.image_file = data.image_file

        self._apply_publish_action(blog, action)
        blog = await self.repo.save(blog)

        if data.likes is not None:
            blog = await replace_likes(self.repo, blog.id, data.likes)
        return blog

    async def update_image(self, blog_id: UUID, image: UploadFile) -> BlogDB:
        """Upload a new cover image and move the blog's image reference to it."""
        blog = await self.repo.get_or_raise(blog_id)
        new_image = await self.images.upload(image)
        await self.images.sync_reference("blog", blog.id, blog.image_file, new_image.id)
        blog.image_file = new_image.id
        return await self.repo.save(blog)

    async def toggle_like(self, blog_id: UUID, user_id: UUID) -> BlogDB:
        return await toggle_like(self.repo, blog_id, user_id)

    async def delete(self, blog_id: UUID) -> None:
        """
        Delete a blog and reconcile everything that pointed at or from it.

        Tags and the category lose the blog id, the cover image loses its
        reference and the blog's comments are deleted.

        Raises:
            RecordNotFoundError: If the blog does not exist
            RelationSyncError: If a related record cannot be written
        """
        blog = await self.repo.get_or_raise(blog_id)
        snapshot = {"category": blog.category, "tags": list(blog.tags)}

        await cascade_delete_refs(snapshot, [self._category(blog.id), self._tags(blog.id)])
        await self.images.release("blog", blog.id, blog.image_file)
        removed = await self.comments.delete_for_blog(blog)
        await self.repo.delete(blog)
        logger.info(f"Blog {blog_id} deleted with {removed} comment(s)")
