# app/routes/category.py

"""
Category Routes.

Summary
-------
Endpoints include:
  - List categories
  - List categories holding published blogs
  - Get category by id
  - Create, update and re-image a category (author only)
  - Delete a category no blog uses (author only)

A category's `blogs` list is maintained from the blog side and cannot be set
through these endpoints.

Rate Limiting
-------------
All endpoints define explicit limits.
"""

from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.dependencies import AuthorDep, CategoryServiceDep, PageQueryDep
from app.managers import limiter
from app.schemas import CategoryCreate, CategoryResponse, CategoryUpdate, MessageResponse

router = APIRouter(prefix="/categories", tags=["🗂️ Categories"])

logger = file_logger(getLogger(__name__))

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[CategoryResponse],
    summary="List categories",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="categories_list",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_categories(
    request: Request,
    response: Response,
    page: PageQueryDep,
    service: CategoryServiceDep,
) -> list[CategoryResponse]:
    categories = await service.get_all(page=page.page, limit=page.limit)
    return [CategoryResponse.model_validate(category) for category in categories]


@router.get(
    "/with-published-blogs",
    response_class=ORJSONResponse,
    response_model=list[CategoryResponse],
    summary="List categories with published blogs",
    description="Categories holding at least one public, published blog, by name.",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="categories_with_published_blogs",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_categories_with_published_blogs(
    request: Request,
    response: Response,
    service: CategoryServiceDep,
) -> list[CategoryResponse]:
    categories = await service.get_with_published_blogs()
    return [CategoryResponse.model_validate(category) for category in categories]


@router.get(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    summary="Get category by ID",
    responses={
        404: {
            "description": "Not found",
            "content": {
                "application/json": {
                    "example": {"detail": "Category with ID <uuid> not found"},
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="categories_get_by_id",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_category(
    request: Request,
    response: Response,
    category_id: UUID,
    service: CategoryServiceDep,
) -> CategoryResponse:
    return CategoryResponse.model_validate(await service.get(category_id))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a category",
    responses={
        409: {
            "description": "Conflict",
            "content": {
                "application/json": {"example": {"detail": "Category 'Travel' already exists"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="categories_create",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def create_category(
    request: Request,
    response: Response,
    category: CategoryCreate,
    author: AuthorDep,
    service: CategoryServiceDep,
) -> CategoryResponse:
    """
    Create a category.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    category : CategoryCreate
        Name, description and an optional existing image id.
    author : Principal
        The authenticated author.
    service : CategoryService
        Category service dependency.

    Returns
    -------
    CategoryResponse
        Created category.
    """
    return CategoryResponse.model_validate(await service.create(category))


@router.put(
    "/{category_id}/image",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    summary="Replace the category image",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="categories_update_image",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def update_category_image(
    request: Request,
    response: Response,
    category_id: UUID,
    author: AuthorDep,
    service: CategoryServiceDep,
    category_image: Annotated[UploadFile, File(alias="categoryImage")],
) -> CategoryResponse:
    category = await service.update_image(category_id, category_image)
    return CategoryResponse.model_validate(category)


@router.put(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    summary="Update a category",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="categories_update",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def update_category(
    request: Request,
    response: Response,
    category_id: UUID,
    category: CategoryUpdate,
    author: AuthorDep,
    service: CategoryServiceDep,
) -> CategoryResponse:
    return CategoryResponse.model_validate(await service.update(category_id, category))


@router.delete(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a category",
    description="Refused while any blog still belongs to the category.",
    responses={
        400: {
            "description": "Category in use",
            "content": {
                "application/json": {
                    "example": {
                        "detail": (
                            "You must remove all the associated blogs before deleting "
                            "this category"
                        ),
                        "referenced_by": 2,
                    },
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="categories_delete",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def delete_category(
    request: Request,
    response: Response,
    category_id: UUID,
    author: AuthorDep,
    service: CategoryServiceDep,
) -> MessageResponse:
    await service.delete(category_id)
    return MessageResponse(message="Category deleted")
