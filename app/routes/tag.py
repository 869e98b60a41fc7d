# app/routes/tag.py

"""Tag Routes: list, read, create, rename and delete tags."""

from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.dependencies import AuthorDep, PageQueryDep, TagServiceDep
from app.managers import limiter
from app.schemas import MessageResponse, TagCreate, TagResponse, TagUpdate

router = APIRouter(prefix="/tags", tags=["🏷️ Tags"])

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[TagResponse],
    summary="List tags",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="tags_list",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_tags(
    request: Request,
    response: Response,
    page: PageQueryDep,
    service: TagServiceDep,
) -> list[TagResponse]:
    tags = await service.get_all(page=page.page, limit=page.limit)
    return [TagResponse.model_validate(tag) for tag in tags]


@router.get(
    "/{tag_id}",
    response_class=ORJSONResponse,
    response_model=TagResponse,
    summary="Get tag by ID",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="tags_get_by_id",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_tag(
    request: Request,
    response: Response,
    tag_id: UUID,
    service: TagServiceDep,
) -> TagResponse:
    return TagResponse.model_validate(await service.get(tag_id))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=TagResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a tag",
    responses={
        409: {
            "description": "Conflict",
            "content": {"application/json": {"example": {"detail": "Tag 'bali' already exists"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="tags_create",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def create_tag(
    request: Request,
    response: Response,
    tag: TagCreate,
    author: AuthorDep,
    service: TagServiceDep,
) -> TagResponse:
    return TagResponse.model_validate(await service.create(tag))


@router.put(
    "/{tag_id}",
    response_class=ORJSONResponse,
    response_model=TagResponse,
    summary="Rename a tag",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="tags_update",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def update_tag(
    request: Request,
    response: Response,
    tag_id: UUID,
    tag: TagUpdate,
    author: AuthorDep,
    service: TagServiceDep,
) -> TagResponse:
    return TagResponse.model_validate(await service.update(tag_id, tag))


@router.delete(
    "/{tag_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a tag",
    description="Refused while any blog still carries the tag.",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="tags_delete",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def delete_tag(
    request: Request,
    response: Response,
    tag_id: UUID,
    author: AuthorDep,
    service: TagServiceDep,
) -> MessageResponse:
    await service.delete(tag_id)
    return MessageResponse(message="Tag deleted")
