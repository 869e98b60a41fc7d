# app/routes/author.py

"""
Author Routes.

The site has exactly one author. These endpoints register and log them in
and manage their public profile.

Summary
-------
Endpoints include:
  - Get the author profile
  - Register the author (refused once an author exists)
  - Log in as the author
  - Update the profile, including the avatar reference
  - Upload a new avatar

Rate Limiting
-------------
Authentication endpoints carry tight limits.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import ORJSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.dependencies import AuthorDep, AuthorServiceDep, AuthServiceDep
from app.managers import limiter
from app.schemas import AuthorRegister, AuthorResponse, AuthorUpdate, LoginRequest, Token
from app.utils.helpers import host

router = APIRouter(prefix="/author", tags=["✍️ Author"])

logger = file_logger(getLogger(__name__))

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=AuthorResponse,
    summary="Get the author profile",
    responses={
        404: {
            "description": "No author registered",
            "content": {"application/json": {"example": {"detail": "Author not found"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="author_get",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_author(
    request: Request,
    response: Response,
    service: AuthorServiceDep,
) -> AuthorResponse:
    return AuthorResponse.model_validate(await service.get())


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthorResponse,
    status_code=HTTP_201_CREATED,
    summary="Register the author",
    responses={
        409: {
            "description": "Author exists",
            "content": {
                "application/json": {"example": {"detail": "An author is already registered"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="author_register",
)
@limiter.limit("3/hour")
async def register_author(
    request: Request,
    response: Response,
    author: AuthorRegister,
    auth_service: AuthServiceDep,
) -> AuthorResponse:
    """
    Register the site's only author.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    author : AuthorRegister
        Profile and credentials.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthorResponse
        The registered author.
    """
    return AuthorResponse.model_validate(await auth_service.register_author(author))


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=Token,
    summary="Log in as the author",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "<jwt>",
                        "token_type": "bearer",
                        "user_id": "123e4567-e89b-12d3-a456-426614174111",
                        "role": "author",
                    },
                },
            },
        },
        401: {
            "description": "Bad credentials",
            "content": {
                "application/json": {"example": {"detail": "Invalid username or password"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="author_login",
)
@limiter.limit("10/minute")
async def login_author(
    request: Request,
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    auth_service: AuthServiceDep,
) -> Token:
    token = await auth_service.login_author(
        LoginRequest(username=form_data.username, password=form_data.password),
    )
    logger.info(f"Author logged in from ip: {host(request)}")
    return token


@router.put(
    "/update",
    response_class=ORJSONResponse,
    response_model=AuthorResponse,
    summary="Update the author profile",
    description="Change name or bio, or point `imageFile` at another image (or `null`).",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="author_update",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def update_author(
    request: Request,
    response: Response,
    update: AuthorUpdate,
    author: AuthorDep,
    service: AuthorServiceDep,
) -> AuthorResponse:
    return AuthorResponse.model_validate(await service.update(author.id, update))


@router.put(
    "/image",
    response_class=ORJSONResponse,
    response_model=AuthorResponse,
    summary="Upload a new avatar",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="author_update_image",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def update_author_image(
    request: Request,
    response: Response,
    author: AuthorDep,
    service: AuthorServiceDep,
    author_image: Annotated[UploadFile, File(alias="authorImage")],
) -> AuthorResponse:
    return AuthorResponse.model_validate(await service.update_image(author.id, author_image))
