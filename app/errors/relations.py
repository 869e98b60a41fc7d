"""
Referential-integrity errors.

These are raised by the relation sync, cascade and like helpers and mapped to
HTTP responses by the exception handler registered in `app.main`.
"""

from logging import getLogger

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class RelationError(BaseAppError):
    """Base exception for back-reference maintenance errors."""

    def __init__(
        self,
        detail: str = "Relation update failed",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class ReferencedRecordError(RelationError):
    """Raised when deleting a record that other records still point at."""

    def __init__(self, entity: str, referenced_by: int) -> None:
        detail = (
            f"You must remove all the associated blogs before deleting this {entity.lower()}"
        )
        super().__init__(detail, HTTP_400_BAD_REQUEST)
        self.referenced_by = referenced_by


class DuplicateLikeError(RelationError):
    """Raised when a submitted likes array holds the same principal twice."""

    def __init__(self, duplicates: list[str]) -> None:
        super().__init__("Likes must not contain duplicate users", HTTP_409_CONFLICT)
        self.duplicates = duplicates


class RelationSyncError(RelationError):
    """
    Raised when a related-record write fails after the owner was changed.

    The request transaction is rolled back when this propagates, so the
    owner write is discarded along with any related writes already flushed.
    """

    def __init__(self, relation: str, related_id: str) -> None:
        super().__init__(
            f"Failed to update {relation} reference on {related_id}",
            HTTP_500_INTERNAL_SERVER_ERROR,
        )
        self.relation = relation
        self.related_id = related_id


relation_exception_handler = create_exception_handler(logger)
