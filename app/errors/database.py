"""Persistence errors raised by repositories and the unit of work."""

from logging import getLogger
from uuid import UUID

from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class DatabaseError(BaseAppError):
    """Base exception for database errors."""

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseConnectionError(DatabaseError):
    """Exception raised when a statement cannot be executed against the store."""

    def __init__(
        self,
        detail: str = "Failed to reach the database",
    ) -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class DuplicateEntryError(DatabaseError):
    """Exception raised when a unique value (slug, name, username) is taken."""

    def __init__(
        self,
        detail: str = "A record with this value already exists",
    ) -> None:
        super().__init__(detail, HTTP_409_CONFLICT)


class RecordNotFoundError(DatabaseError):
    """Exception raised when an owning or required record is absent."""

    def __init__(
        self,
        detail: str = "Record not found",
        entity: str | None = None,
        record_id: UUID | str | None = None,
    ) -> None:
        if entity and record_id is not None:
            detail = f"{entity} with ID {record_id} not found"
        elif entity:
            detail = f"{entity} not found"
        super().__init__(detail, HTTP_404_NOT_FOUND)


database_exception_handler = create_exception_handler(logger)
