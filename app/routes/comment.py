# app/routes/comment.py

"""
Comment Routes.

Summary
-------
Endpoints include:
  - List comments (optionally for one blog)
  - Get comment by id and list its replies
  - Comment on a blog and reply to a comment
  - Edit a comment or replace its likes
  - Toggle a like
  - Delete a comment with its replies

Comments are written by the author or by viewers; the kind of principal
comes from the bearer token. Every write keeps the blog's `comments`, the
parent's `replies` and the principal's `comments` lists in step.

Rate Limiting
-------------
All endpoints define explicit limits.
"""

from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.dependencies import CommentServiceDep, PageQueryDep, PrincipalDep, ensure_self
from app.managers import limiter
from app.schemas import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    MessageResponse,
    ReplyCreate,
)

router = APIRouter(prefix="/comments", tags=["💬 Comments"])

logger = file_logger(getLogger(__name__))

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}

COMMENT_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174600",
    "content": "Great read!",
    "authorId": None,
    "viewerId": "123e4567-e89b-12d3-a456-426614174700",
    "blogId": "123e4567-e89b-12d3-a456-426614174000",
    "parentComment": None,
    "replies": [],
    "likes": [],
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": None,
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[CommentResponse],
    summary="List comments",
    responses={
        200: {"content": {"application/json": {"example": [COMMENT_EXAMPLE]}}},
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="comments_list",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_comments(
    request: Request,
    response: Response,
    page: PageQueryDep,
    service: CommentServiceDep,
    blog_id: Annotated[UUID | None, Query(alias="blogId")] = None,
) -> list[CommentResponse]:
    filters = {"blog_id": blog_id} if blog_id else None
    comments = await service.get_all(page=page.page, limit=page.limit, filters=filters)
    return [CommentResponse.model_validate(comment) for comment in comments]


@router.get(
    "/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    summary="Get comment by ID",
    responses={
        200: {"content": {"application/json": {"example": COMMENT_EXAMPLE}}},
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="comments_get_by_id",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_comment(
    request: Request,
    response: Response,
    comment_id: UUID,
    service: CommentServiceDep,
) -> CommentResponse:
    return CommentResponse.model_validate(await service.get(comment_id))


@router.get(
    "/{comment_id}/replies",
    response_class=ORJSONResponse,
    response_model=list[CommentResponse],
    summary="List replies to a comment",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="comments_list_replies",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_replies(
    request: Request,
    response: Response,
    comment_id: UUID,
    service: CommentServiceDep,
) -> list[CommentResponse]:
    replies = await service.get_replies(comment_id)
    return [CommentResponse.model_validate(reply) for reply in replies]


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    status_code=HTTP_201_CREATED,
    summary="Comment on a blog",
    responses={
        201: {"content": {"application/json": {"example": COMMENT_EXAMPLE}}},
        404: {
            "description": "Blog not found",
            "content": {
                "application/json": {"example": {"detail": "Blog with ID <uuid> not found"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="comments_create",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def create_comment(
    request: Request,
    response: Response,
    comment: CommentCreate,
    principal: PrincipalDep,
    service: CommentServiceDep,
) -> CommentResponse:
    """
    Add a top-level comment to a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    comment : CommentCreate
        Comment text and target blog.
    principal : Principal
        The commenting author or viewer.
    service : CommentService
        Comment service dependency.

    Returns
    -------
    CommentResponse
        The new comment.
    """
    return CommentResponse.model_validate(await service.create(principal, comment))


@router.post(
    "/{comment_id}/replies",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    status_code=HTTP_201_CREATED,
    summary="Reply to a comment",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="comments_reply",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def reply_to_comment(
    request: Request,
    response: Response,
    comment_id: UUID,
    reply: ReplyCreate,
    principal: PrincipalDep,
    service: CommentServiceDep,
) -> CommentResponse:
    return CommentResponse.model_validate(await service.reply(principal, comment_id, reply))


@router.put(
    "/{comment_id}/likes/{user_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    summary="Toggle a like",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="comments_toggle_like",
)
@limiter.limit(lambda key: "60/minute" if "apikey" in key else "30/minute")
async def toggle_comment_like(
    request: Request,
    response: Response,
    comment_id: UUID,
    user_id: UUID,
    principal: PrincipalDep,
    service: CommentServiceDep,
) -> CommentResponse:
    ensure_self(principal, user_id)
    return CommentResponse.model_validate(await service.toggle_like(comment_id, user_id))


@router.put(
    "/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    summary="Edit a comment",
    description="Change the text and/or replace the whole likes array.",
    responses={
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {
                    "example": {"detail": "You can only change your own comments"},
                },
            },
        },
        409: {
            "description": "Duplicate like",
            "content": {
                "application/json": {
                    "example": {"detail": "Likes must not contain duplicate users"},
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="comments_update",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def update_comment(
    request: Request,
    response: Response,
    comment_id: UUID,
    comment: CommentUpdate,
    principal: PrincipalDep,
    service: CommentServiceDep,
) -> CommentResponse:
    return CommentResponse.model_validate(await service.update(principal, comment_id, comment))


@router.delete(
    "/{comment_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a comment",
    description="Delete a comment or reply together with the replies under it.",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="comments_delete",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def delete_comment(
    request: Request,
    response: Response,
    comment_id: UUID,
    principal: PrincipalDep,
    service: CommentServiceDep,
) -> MessageResponse:
    removed = await service.delete(principal, comment_id)
    logger.info(f"{principal.username} deleted comment {comment_id}")
    return MessageResponse(message=f"Deleted {removed} comment(s)")
