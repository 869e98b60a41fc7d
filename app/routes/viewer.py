# app/routes/viewer.py

"""
Viewer Routes.

Summary
-------
Endpoints include:
  - Register and log in as a viewer
  - List viewers and get a viewer by id
  - Update the account, confirm or change the password
  - Delete the account together with its comments

Account changes are accepted only from the viewer the account belongs to.

Rate Limiting
-------------
Authentication endpoints carry tight limits.
"""

from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger
from app.dependencies import (
    AuthServiceDep,
    PageQueryDep,
    ViewerDep,
    ViewerServiceDep,
    ensure_self,
)
from app.managers import limiter
from app.schemas import (
    LoginRequest,
    MessageResponse,
    PasswordChange,
    PasswordConfirm,
    Token,
    ViewerRegister,
    ViewerResponse,
    ViewerUpdate,
)
from app.utils.helpers import host

router = APIRouter(prefix="/viewers", tags=["👥 Viewers"])

logger = file_logger(getLogger(__name__))

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=ViewerResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a viewer",
    responses={
        409: {
            "description": "Username taken",
            "content": {
                "application/json": {"example": {"detail": "Username 'jane' is already taken"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="viewers_register",
)
@limiter.limit("5/hour")
async def register_viewer(
    request: Request,
    response: Response,
    viewer: ViewerRegister,
    auth_service: AuthServiceDep,
) -> ViewerResponse:
    return ViewerResponse.model_validate(await auth_service.register_viewer(viewer))


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=Token,
    summary="Log in as a viewer",
    responses={
        401: {
            "description": "Bad credentials",
            "content": {
                "application/json": {"example": {"detail": "Invalid username or password"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="viewers_login",
)
@limiter.limit("10/minute")
async def login_viewer(
    request: Request,
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    auth_service: AuthServiceDep,
) -> Token:
    """
    Exchange viewer credentials for a bearer token.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    form_data : OAuth2PasswordRequestForm
        Form data containing username and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    Token
        Access token for the viewer.
    """
    token = await auth_service.login_viewer(
        LoginRequest(username=form_data.username, password=form_data.password),
    )
    logger.info(f"Viewer {form_data.username} logged in from ip: {host(request)}")
    return token


@router.get(
    "/all",
    response_class=ORJSONResponse,
    response_model=list[ViewerResponse],
    summary="List viewers",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="viewers_list",
)
@limiter.limit(lambda key: "60/minute" if "apikey" in key else "30/minute")
async def list_viewers(
    request: Request,
    response: Response,
    page: PageQueryDep,
    service: ViewerServiceDep,
) -> list[ViewerResponse]:
    viewers = await service.get_all(page=page.page, limit=page.limit)
    return [ViewerResponse.model_validate(viewer) for viewer in viewers]


@router.get(
    "/{viewer_id}",
    response_class=ORJSONResponse,
    response_model=ViewerResponse,
    summary="Get viewer by ID",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="viewers_get_by_id",
)
@limiter.limit(lambda key: "60/minute" if "apikey" in key else "30/minute")
async def get_viewer(
    request: Request,
    response: Response,
    viewer_id: UUID,
    service: ViewerServiceDep,
) -> ViewerResponse:
    return ViewerResponse.model_validate(await service.get(viewer_id))


@router.put(
    "/{viewer_id}/update",
    response_class=ORJSONResponse,
    response_model=ViewerResponse,
    summary="Update a viewer account",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="viewers_update",
)
@limiter.limit(lambda key: "20/minute" if "apikey" in key else "10/minute")
async def update_viewer(
    request: Request,
    response: Response,
    viewer_id: UUID,
    update: ViewerUpdate,
    viewer: ViewerDep,
    service: ViewerServiceDep,
) -> ViewerResponse:
    ensure_self(viewer, viewer_id)
    return ViewerResponse.model_validate(await service.update(viewer_id, update))


@router.post(
    "/{viewer_id}/confirm-password",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Confirm the viewer's password",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="viewers_confirm_password",
)
@limiter.limit("10/minute")
async def confirm_viewer_password(
    request: Request,
    response: Response,
    viewer_id: UUID,
    payload: PasswordConfirm,
    viewer: ViewerDep,
    service: ViewerServiceDep,
) -> MessageResponse:
    ensure_self(viewer, viewer_id)
    await service.confirm_password(viewer_id, payload.password)
    return MessageResponse(message="Password confirmed")


@router.put(
    "/{viewer_id}/change-password",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Change the viewer's password",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="viewers_change_password",
)
@limiter.limit("5/minute")
async def change_viewer_password(
    request: Request,
    response: Response,
    viewer_id: UUID,
    payload: PasswordChange,
    viewer: ViewerDep,
    service: ViewerServiceDep,
) -> MessageResponse:
    ensure_self(viewer, viewer_id)
    await service.change_password(viewer_id, payload)
    return MessageResponse(message="Password changed")


@router.delete(
    "/{viewer_id}/delete",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a viewer account",
    description="Delete the account and every comment thread it started.",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="viewers_delete",
)
@limiter.limit("5/minute")
async def delete_viewer(
    request: Request,
    response: Response,
    viewer_id: UUID,
    viewer: ViewerDep,
    service: ViewerServiceDep,
) -> MessageResponse:
    ensure_self(viewer, viewer_id)
    await service.delete(viewer_id)
    return MessageResponse(message="Account deleted")
