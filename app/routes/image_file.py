# app/routes/image_file.py

"""
Image File Routes.

Summary
-------
Endpoints include:
  - List image metadata
  - Get image metadata by id
  - Stream the image binary
  - Upload an image with an optional credit (author only)
  - Update the credit (author only)
  - Delete an image (author only)

Deleting an image clears `imageFile` on every blog, author or category that
points at it before the binary is removed from the object store.

Rate Limiting
-------------
All endpoints define explicit limits.
"""

from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.dependencies import AuthorDep, ImageFileServiceDep, PageQueryDep
from app.managers import limiter
from app.schemas import Credit, ImageFileResponse, ImageFileUpdate, MessageResponse

router = APIRouter(prefix="/image-files", tags=["🖼️ Image Files"])

logger = file_logger(getLogger(__name__))

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}

IMAGE_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174222",
    "fileName": "crater-rim.jpg",
    "fileType": "image/jpeg",
    "size": 182034,
    "url": "/uploads/image_files/123e4567-e89b-12d3-a456-426614174222.jpg",
    "uploadDate": "2025-01-01T00:00:00Z",
    "credit": {
        "authorName": "Jane Doe",
        "authorURL": "https://example.com/jane",
        "sourceName": "Unsplash",
        "sourceURL": "https://unsplash.com",
    },
    "referencedDocs": [{"kind": "blog", "id": "123e4567-e89b-12d3-a456-426614174000"}],
}


def parse_credit(credit: str | None) -> Credit | None:
    """
    Parse the JSON `credit` form field of a multipart upload.

    Raises
    ------
    RequestValidationError
        If the field is not a valid credit object.
    """
    if not credit:
        return None
    try:
        return Credit.model_validate_json(credit)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", "credit", *error["loc"])} for error in e.errors()],
        ) from e


@router.get(
    "/docs",
    response_class=ORJSONResponse,
    response_model=list[ImageFileResponse],
    summary="List image files",
    responses={
        200: {"content": {"application/json": {"example": [IMAGE_EXAMPLE]}}},
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="image_files_list",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_image_files(
    request: Request,
    response: Response,
    page: PageQueryDep,
    service: ImageFileServiceDep,
) -> list[ImageFileResponse]:
    images = await service.get_all(page=page.page, limit=page.limit)
    return [ImageFileResponse.model_validate(image) for image in images]


@router.get(
    "/{image_id}/doc",
    response_class=ORJSONResponse,
    response_model=ImageFileResponse,
    summary="Get image metadata",
    responses={
        200: {"content": {"application/json": {"example": IMAGE_EXAMPLE}}},
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="image_files_get",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_image_file(
    request: Request,
    response: Response,
    image_id: UUID,
    service: ImageFileServiceDep,
) -> ImageFileResponse:
    return ImageFileResponse.model_validate(await service.get(image_id))


@router.get(
    "/{image_id}/source",
    summary="Get the image binary",
    response_class=Response,
    responses={
        200: {"content": {"image/*": {}}, "description": "The image bytes"},
        404: {
            "description": "Not found",
            "content": {
                "application/json": {"example": {"detail": "ImageFile with ID <uuid> not found"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="image_files_source",
)
@limiter.limit(lambda key: "240/minute" if "apikey" in key else "120/minute")
async def get_image_source(
    request: Request,
    response: Response,
    image_id: UUID,
    service: ImageFileServiceDep,
) -> Response:
    """
    Stream an image's bytes with its stored content type.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    image_id : UUID
        Image identifier.
    service : ImageFileService
        Image file service dependency.

    Returns
    -------
    Response
        Raw image bytes.
    """
    image, data = await service.read_source(image_id)
    return Response(
        content=data,
        media_type=image.file_type,
        headers={"Cache-Control": "public, max-age=86400"},
    )


@router.post(
    "/upload",
    response_class=ORJSONResponse,
    response_model=ImageFileResponse,
    status_code=HTTP_201_CREATED,
    summary="Upload an image",
    description=(
        "Upload `uploadImage` as multipart form data. `credit` may carry a JSON "
        "object with `authorName`, `authorURL`, `sourceName` and `sourceURL`."
    ),
    responses={
        201: {"content": {"application/json": {"example": IMAGE_EXAMPLE}}},
        413: {
            "description": "Image too large",
            "content": {
                "application/json": {"example": {"detail": "Image exceeds maximum size"}},
            },
        },
        415: {
            "description": "Unsupported type",
            "content": {
                "application/json": {"example": {"detail": "Unsupported image type"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="image_files_upload",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def upload_image_file(
    request: Request,
    response: Response,
    author: AuthorDep,
    service: ImageFileServiceDep,
    upload_image: Annotated[UploadFile, File(alias="uploadImage")],
    credit: Annotated[str | None, Form()] = None,
) -> ImageFileResponse:
    image = await service.upload(upload_image, parse_credit(credit))
    return ImageFileResponse.model_validate(image)


@router.put(
    "/{image_id}/update",
    response_class=ORJSONResponse,
    response_model=ImageFileResponse,
    summary="Update the image credit",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="image_files_update",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def update_image_file(
    request: Request,
    response: Response,
    image_id: UUID,
    update: ImageFileUpdate,
    author: AuthorDep,
    service: ImageFileServiceDep,
) -> ImageFileResponse:
    image = await service.update_credit(image_id, update.credit)
    return ImageFileResponse.model_validate(image)


@router.delete(
    "/{image_id}/doc",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete an image",
    description="Clear every reference to the image, then delete its metadata and binary.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Image deleted, 2 reference(s) cleared"},
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="image_files_delete",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def delete_image_file(
    request: Request,
    response: Response,
    image_id: UUID,
    author: AuthorDep,
    service: ImageFileServiceDep,
) -> MessageResponse:
    released = await service.delete(image_id)
    return MessageResponse(message=f"Image deleted, {released} reference(s) cleared")
