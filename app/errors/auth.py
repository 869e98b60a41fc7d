"""Authentication and authorisation errors."""

from logging import getLogger

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN, HTTP_409_CONFLICT

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password", HTTP_401_UNAUTHORIZED)


class ForbiddenError(UserAuthenticationError):
    """Raised when an authenticated principal may not perform an action."""

    def __init__(self, detail: str = "You are not allowed to perform this action") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class AuthorAlreadyRegisteredError(UserAuthenticationError):
    """Raised when a second author tries to register."""

    def __init__(self) -> None:
        super().__init__("An author account already exists", HTTP_409_CONFLICT)


auth_exception_handler = create_exception_handler(logger)
