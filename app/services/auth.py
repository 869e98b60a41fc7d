"""Registration and login for the author and for viewers."""

from logging import getLogger

from app.configs import file_logger
from app.errors.auth import AuthorAlreadyRegisteredError, InvalidCredentialsError
from app.errors.database import DuplicateEntryError
from app.managers.password_manager import hash_password, verify_password
from app.managers.token_manager import create_access_token
from app.models import AuthorDB, ViewerDB
from app.repositories import AuthorRepository, ViewerRepository
from app.schemas.auth import LoginRequest, Role, Token
from app.schemas.user import AuthorRegister, ViewerRegister

logger = file_logger(getLogger(__name__))


class AuthService:
    """Service for registering and authenticating principals."""

    def __init__(self, authors: AuthorRepository, viewers: ViewerRepository) -> None:
        self.authors = authors
        self.viewers = viewers

    @staticmethod
    def create_token(user: AuthorDB | ViewerDB, role: Role) -> Token:
        access_token = create_access_token(user_id=user.id, username=user.username, role=role)
        return Token(access_token=access_token, user_id=user.id, role=role)

    async def register_author(self, data: AuthorRegister) -> AuthorDB:
        """
        Register the site's author.

        Raises:
            AuthorAlreadyRegisteredError: If an author already exists
        """
        if await self.authors.get_single() is not None:
            raise AuthorAlreadyRegisteredError
        author = AuthorDB(
            name=data.name,
            bio=data.bio,
            email=str(data.email),
            username=data.username,
            password_hash=await hash_password(data.password),
        )
        author = await self.authors.save(author)
        logger.info(f"Author {author.username} registered")
        return author

    async def register_viewer(self, data: ViewerRegister) -> ViewerDB:
        """
        Raises:
            DuplicateEntryError: If the username is taken
        """
        if await self.viewers.get_by_username(data.username) is not None:
            mssg = f"Username '{data.username}' is already taken"
            raise DuplicateEntryError(mssg)
        viewer = ViewerDB(
            name=data.name,
            username=data.username,
            password_hash=await hash_password(data.password),
        )
        return await self.viewers.save(viewer)

    async def login_author(self, credentials: LoginRequest) -> Token:
        """
        Raises:
            InvalidCredentialsError: If the username or password is wrong
        """
        author = await self.authors.get_by_username(credentials.username)
        hashed = author.password_hash if author else None
        if not await verify_password(credentials.password, hashed) or author is None:
            raise InvalidCredentialsError
        return self.create_token(author, "author")

    async def login_viewer(self, credentials: LoginRequest) -> Token:
        """
        Raises:
            InvalidCredentialsError: If the username or password is wrong
        """
        viewer = await self.viewers.get_by_username(credentials.username)
        hashed = viewer.password_hash if viewer else None
        if not await verify_password(credentials.password, hashed) or viewer is None:
            raise InvalidCredentialsError
        return self.create_token(viewer, "viewer")
