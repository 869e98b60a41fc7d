from app.errors.auth import (
    AuthorAlreadyRegisteredError,
    ForbiddenError,
    InvalidCredentialsError,
    UserAuthenticationError,
    auth_exception_handler,
)
from app.errors.base import BaseAppError, create_exception_handler
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from app.errors.password_hasher import PasswordHashingError, password_hashing_exception_handler
from app.errors.relations import (
    DuplicateLikeError,
    ReferencedRecordError,
    RelationError,
    RelationSyncError,
    relation_exception_handler,
)
from app.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    StorageError,
    UnsupportedImageTypeError,
    UploadError,
    upload_exception_handler,
)
from app.errors.validation import (
    ValidationError,
    domain_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "AuthorAlreadyRegisteredError",
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "DuplicateLikeError",
    "ForbiddenError",
    "ImageTooLargeError",
    "InvalidCredentialsError",
    "InvalidImageError",
    "PasswordHashingError",
    "RecordNotFoundError",
    "ReferencedRecordError",
    "RelationError",
    "RelationSyncError",
    "StorageError",
    "UnsupportedImageTypeError",
    "UploadError",
    "UserAuthenticationError",
    "ValidationError",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "domain_validation_exception_handler",
    "password_hashing_exception_handler",
    "relation_exception_handler",
    "upload_exception_handler",
    "validation_exception_handler",
]
