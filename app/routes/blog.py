# app/routes/blog.py

"""
Blog Routes.

Provides the author's blog workflow (create, publish, edit, delete) and the
public read endpoints for published posts.

Summary
-------
Endpoints include:
  - List blogs (author only, with filters and sort)
  - List, count and look up published blogs
  - Get blog by id
  - Create blog as draft or published (multipart)
  - Replace the cover image (multipart)
  - Update and save/publish blog
  - Toggle a like
  - Delete blog

Every write keeps the back-references on tags, the category and the cover
image in step with the blog, inside the request transaction.

Dependencies
------------
  - `BlogServiceDep`: Blog service bound to the request session.
  - `AuthorDep` / `PrincipalDep`: Authenticated author or any principal.

Rate Limiting
-------------
All endpoints define explicit limits and include `429` response examples. Tiered
limits apply when `X-API-Key` is present.
"""

from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, File, Form, Query, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.dependencies import (
    AuthorDep,
    BlogQueryListDep,
    BlogServiceDep,
    PageQueryDep,
    PrincipalDep,
    ensure_self,
)
from app.managers import limiter
from app.models import BlogDB
from app.schemas import (
    BlogCreate,
    BlogResponse,
    BlogUpdate,
    MessageResponse,
    PublishAction,
    TotalResponse,
)

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])

logger = file_logger(getLogger(__name__))

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}

BLOG_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "title": "Hiking the Crater Rim",
    "slug": "hiking-the-crater-rim",
    "content": "...",
    "authorId": "123e4567-e89b-12d3-a456-426614174111",
    "imageFile": "123e4567-e89b-12d3-a456-426614174222",
    "category": "123e4567-e89b-12d3-a456-426614174333",
    "tags": ["123e4567-e89b-12d3-a456-426614174444"],
    "likes": [],
    "comments": [],
    "isPrivate": False,
    "isPublished": True,
    "publishedAt": "2025-01-01T00:00:00Z",
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": None,
}


def db_blog_to_response(db_blog: BlogDB) -> BlogResponse:
    """
    Convert a `BlogDB` instance to `BlogResponse`.

    Parameters
    ----------
    db_blog : BlogDB
        Database blog entity.

    Returns
    -------
    BlogResponse
        Serialized blog response.
    """
    return BlogResponse.model_validate(db_blog)


def blog_create_form(
    title: Annotated[str, Form()],
    content: Annotated[str, Form()],
    category: Annotated[UUID | None, Form()] = None,
    tags: Annotated[list[UUID] | None, Form()] = None,
    is_private: Annotated[bool, Form(alias="isPrivate")] = False,
    existing_image_id: Annotated[UUID | None, Form(alias="existingImageId")] = None,
) -> BlogCreate:
    """
    Collect the multipart form fields of a blog creation into `BlogCreate`.

    Raises
    ------
    RequestValidationError
        If the fields break the schema constraints.
    """
    try:
        return BlogCreate(
            title=title,
            content=content,
            category=category,
            tags=tags or [],
            is_private=is_private,
            existing_image_id=existing_image_id,
        )
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors()],
        ) from e


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="List blogs",
    description="List every blog, drafts and private posts included. Author only.",
    responses={
        200: {"content": {"application/json": {"example": [BLOG_EXAMPLE]}}},
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_list",
)
@limiter.limit(lambda key: "60/minute" if "apikey" in key else "30/minute")
async def list_blogs(
    request: Request,
    response: Response,
    query: BlogQueryListDep,
    author: AuthorDep,
    service: BlogServiceDep,
) -> list[BlogResponse]:
    """
    List blogs with pagination, equality filters and a named sort.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    query : BlogListQuery
        Page, sort and filters.
    author : Principal
        The authenticated author.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    list[BlogResponse]
        One page of blogs.
    """
    blogs = await service.get_all(
        page=query.page,
        limit=query.limit,
        filters=query.filters,
        sort=query.sort,
    )
    return [db_blog_to_response(blog) for blog in blogs]


@router.get(
    "/published",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="List published blogs",
    description="List public, published blogs, newest first.",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="blogs_list_published",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_published_blogs(
    request: Request,
    response: Response,
    page: PageQueryDep,
    service: BlogServiceDep,
) -> list[BlogResponse]:
    blogs = await service.get_published(page=page.page, limit=page.limit)
    return [db_blog_to_response(blog) for blog in blogs]


@router.get(
    "/published/total",
    response_class=ORJSONResponse,
    response_model=TotalResponse,
    summary="Count published blogs",
    responses={
        200: {"content": {"application/json": {"example": {"total": 12}}}},
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_count_published",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def count_published_blogs(
    request: Request,
    response: Response,
    service: BlogServiceDep,
) -> TotalResponse:
    return TotalResponse(total=await service.count_published())


@router.get(
    "/published/unset-category",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="List published blogs without a category",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="blogs_list_published_uncategorised",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_published_without_category(
    request: Request,
    response: Response,
    service: BlogServiceDep,
) -> list[BlogResponse]:
    blogs = await service.get_published_without_category()
    return [db_blog_to_response(blog) for blog in blogs]


@router.get(
    "/published/doc",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Get a published blog by id or slug",
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Blog not found"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_get_published",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_published_blog(
    request: Request,
    response: Response,
    service: BlogServiceDep,
    blog_id: Annotated[UUID | None, Query(alias="id")] = None,
    slug: Annotated[str | None, Query()] = None,
) -> BlogResponse:
    """
    Get a public, published blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    service : BlogService
        Blog service dependency.
    blog_id : UUID | None
        Blog id, takes precedence over `slug`.
    slug : str | None
        Blog slug.

    Returns
    -------
    BlogResponse
        The blog.
    """
    return db_blog_to_response(await service.get_published_doc(blog_id=blog_id, slug=slug))


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Get blog by ID",
    description="Retrieve any blog, drafts included. Author only.",
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        404: {
            "description": "Not found",
            "content": {
                "application/json": {"example": {"detail": "Blog with ID <uuid> not found"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_get_by_id",
)
@limiter.limit(lambda key: "60/minute" if "apikey" in key else "30/minute")
async def get_blog(
    request: Request,
    response: Response,
    blog_id: UUID,
    author: AuthorDep,
    service: BlogServiceDep,
) -> BlogResponse:
    return db_blog_to_response(await service.get(blog_id))


@router.post(
    "/{publish_action}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a blog",
    description=(
        "Create a blog from a multipart form. `save` stores a draft and `publish` "
        "publishes it. A cover image is required: upload `blogImage` or pass "
        "`existingImageId`."
    ),
    responses={
        201: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        404: {
            "description": "Referenced record missing",
            "content": {
                "application/json": {"example": {"detail": "Tag with ID <uuid> not found"}},
            },
        },
        409: {
            "description": "Conflict",
            "content": {
                "application/json": {
                    "example": {"detail": "Blog with slug 'hiking' already exists"},
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_create",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def create_blog(
    request: Request,
    response: Response,
    publish_action: PublishAction,
    author: AuthorDep,
    service: BlogServiceDep,
    form: Annotated[BlogCreate, Depends(blog_create_form)],
    blog_image: Annotated[UploadFile | None, File(alias="blogImage")] = None,
) -> BlogResponse:
    """
    Create a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    publish_action : PublishAction
        `save` for a draft, `publish` to publish right away.
    author : Principal
        The authenticated author.
    service : BlogService
        Blog service dependency.
    form : BlogCreate
        Validated form fields.
    blog_image : UploadFile | None
        Uploaded cover image.

    Returns
    -------
    BlogResponse
        Created blog data.
    """
    blog = await service.create(author.id, form, publish_action, image=blog_image)
    return db_blog_to_response(blog)


@router.put(
    "/{blog_id}/image-update",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Replace the cover image",
    description="Upload a new cover image and move the blog's image reference to it.",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="blogs_update_image",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def update_blog_image(
    request: Request,
    response: Response,
    blog_id: UUID,
    author: AuthorDep,
    service: BlogServiceDep,
    blog_image: Annotated[UploadFile, File(alias="blogImage")],
) -> BlogResponse:
    return db_blog_to_response(await service.update_image(blog_id, blog_image))


@router.put(
    "/{blog_id}/likes/{user_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Toggle a like",
    description="Add the principal's like, or take it back when already present.",
    responses={
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {
                    "example": {"detail": "You can only act on your own behalf"},
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_toggle_like",
)
@limiter.limit(lambda key: "60/minute" if "apikey" in key else "30/minute")
async def toggle_blog_like(
    request: Request,
    response: Response,
    blog_id: UUID,
    user_id: UUID,
    principal: PrincipalDep,
    service: BlogServiceDep,
) -> BlogResponse:
    ensure_self(principal, user_id)
    return db_blog_to_response(await service.toggle_like(blog_id, user_id))


@router.put(
    "/{blog_id}/{publish_action}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update a blog",
    description=(
        "Apply a partial update, then `save` it as a draft or `publish` it. "
        "`likes`, when given, replaces the whole likes array."
    ),
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        409: {
            "description": "Duplicate like",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Likes must not contain duplicate users",
                        "duplicates": ["123e4567-e89b-12d3-a456-426614174555"],
                    },
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_update",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "15/minute")
async def update_blog(
    request: Request,
    response: Response,
    blog_id: UUID,
    publish_action: PublishAction,
    author: AuthorDep,
    service: BlogServiceDep,
    blog: Annotated[
        BlogUpdate,
        Body(
            examples={
                "retag": {
                    "summary": "Move the blog to other tags",
                    "value": {"tags": ["123e4567-e89b-12d3-a456-426614174444"]},
                },
            },
        ),
    ],
) -> BlogResponse:
    """
    Update a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog identifier.
    publish_action : PublishAction
        `save` or `publish`.
    author : Principal
        The authenticated author.
    service : BlogService
        Blog service dependency.
    blog : BlogUpdate
        Partial update payload.

    Returns
    -------
    BlogResponse
        Updated blog data.
    """
    return db_blog_to_response(await service.update(blog_id, blog, publish_action))


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a blog",
    description=(
        "Delete a blog. Its tags and category drop the blog id, its cover image "
        "drops the reference and its comments are deleted."
    ),
    responses={
        200: {"content": {"application/json": {"example": {"message": "Blog deleted"}}}},
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_delete",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def delete_blog(
    request: Request,
    response: Response,
    blog_id: UUID,
    author: AuthorDep,
    service: BlogServiceDep,
) -> MessageResponse:
    await service.delete(blog_id)
    logger.info(f"Blog {blog_id} deleted by {author.username}")
    return MessageResponse(message="Blog deleted")
