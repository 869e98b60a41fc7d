from collections.abc import Awaitable, Callable
from logging import Logger
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.utils.helpers import host


class BaseAppError(Exception):
    """
    Base exception class for application errors.

    Subclasses set extra public attributes (for example `referenced_by` or
    `duplicates`); those are returned next to `detail` in the response body.
    """

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

    @property
    def extra(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in vars(self).items()
            if key not in ("status_code", "detail") and not key.startswith("_")
        }


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create the JSON exception handler shared by every error family.

    Client errors are logged as warnings, server errors as errors. Anything
    that is not a `BaseAppError` is reported as a bare 500.

    Args:
        logger: Logger of the error module registering the handler.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        if not isinstance(exc, BaseAppError):
            logger.error(
                f"Unhandled {type(exc).__name__} for ip: {host(request)} "
                f"for endpoint {request.url.path}",
            )
            return ORJSONResponse(
                content={"detail": "Internal Server Error"},
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            )

        message = f"{exc.detail} for ip: {host(request)} for endpoint {request.url.path}"
        if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(message)
        else:
            logger.warning(message)

        return ORJSONResponse(
            content={"detail": exc.detail, **exc.extra},
            status_code=exc.status_code,
        )

    return handler
