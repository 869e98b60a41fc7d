# app/dependencies/dependencies.py

"""Application dependencies: sessions, services, principals and list queries."""

from dataclasses import dataclass
from typing import Annotated, Literal
from uuid import UUID

from fastapi import Depends, HTTPException, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.configs import settings
from app.db import get_session
from app.managers.token_manager import decode_access_token
from app.repositories import AuthorRepository, ViewerRepository
from app.schemas.auth import Principal
from app.services import (
    AuthorService,
    AuthService,
    BlogService,
    CategoryService,
    CommentService,
    ImageFileService,
    MediaService,
    TagService,
    ViewerService,
)
from app.services.storage import StorageService, get_storage_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/viewers/login")

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_storage() -> StorageService:
    """Resolve the configured object store backend."""
    return get_storage_service()


StorageDep = Annotated[StorageService, Depends(get_storage)]


def get_media_service(storage: StorageDep) -> MediaService:
    return MediaService(storage)


MediaDep = Annotated[MediaService, Depends(get_media_service)]


def get_auth_service(session: SessionDep) -> AuthService:
    return AuthService(AuthorRepository(session), ViewerRepository(session))


def get_blog_service(session: SessionDep, media: MediaDep) -> BlogService:
    return BlogService(session, media)


def get_category_service(session: SessionDep, media: MediaDep) -> CategoryService:
    return CategoryService(session, media)


def get_tag_service(session: SessionDep) -> TagService:
    return TagService(session)


def get_image_file_service(session: SessionDep, media: MediaDep) -> ImageFileService:
    return ImageFileService(session, media)


def get_comment_service(session: SessionDep) -> CommentService:
    return CommentService(session)


def get_author_service(session: SessionDep, media: MediaDep) -> AuthorService:
    return AuthorService(session, media)


def get_viewer_service(session: SessionDep) -> ViewerService:
    return ViewerService(session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
TagServiceDep = Annotated[TagService, Depends(get_tag_service)]
ImageFileServiceDep = Annotated[ImageFileService, Depends(get_image_file_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
ViewerServiceDep = Annotated[ViewerService, Depends(get_viewer_service)]


async def get_current_principal(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: SessionDep,
) -> Principal:
    """
    Resolve the author or viewer named by the bearer token.

    Parameters
    ----------
    token : str
        Bearer token.
    session : AsyncSession
        Database session.

    Returns
    -------
    Principal
        The authenticated principal.
    """
    token_data = decode_access_token(token)
    if not token_data or not token_data.user_id or not token_data.role:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    repo = AuthorRepository(session) if token_data.role == "author" else ViewerRepository(session)
    user = await repo.get_by_id(token_data.user_id)
    if not user:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Principal(id=user.id, username=user.username, role=token_data.role)


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]


async def get_current_author(principal: PrincipalDep) -> Principal:
    """Allow only the author through."""
    if not principal.is_author:
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Author access required")
    return principal


async def get_current_viewer(principal: PrincipalDep) -> Principal:
    """Allow only viewers through."""
    if principal.is_author:
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Viewer access required")
    return principal


AuthorDep = Annotated[Principal, Depends(get_current_author)]
ViewerDep = Annotated[Principal, Depends(get_current_viewer)]


def ensure_self(principal: Principal, user_id: UUID) -> None:
    """Likes and account changes may only be made by the principal themself."""
    if principal.id != user_id:
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail="You can only act on your own behalf",
        )


@dataclass(frozen=True)
class PageQuery:
    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE


def get_page_query(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"),
    ] = settings.DEFAULT_PAGE_SIZE,
) -> PageQuery:
    return PageQuery(page=page, limit=limit)


PageQueryDep = Annotated[PageQuery, Depends(get_page_query)]


@dataclass(frozen=True)
class BlogListQuery:
    """
    Query container for blog listing and filters.

    Parameters
    ----------
    page : int
        1-based page number.
    limit : int
        Page size.
    sort : Literal
        Named sort order.
    category : UUID | None
        Optional category filter.
    is_published : bool | None
        Optional publication state filter.
    is_private : bool | None
        Optional privacy filter.
    """

    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE
    sort: Literal["latest", "oldest", "title"] = "latest"
    category: UUID | None = None
    is_published: bool | None = None
    is_private: bool | None = None

    @property
    def filters(self) -> dict[str, UUID | bool]:
        candidates = {
            "category": self.category,
            "is_published": self.is_published,
            "is_private": self.is_private,
        }
        return {name: value for name, value in candidates.items() if value is not None}


def get_blog_list_query(
    page: PageQueryDep,
    sort: Annotated[Literal["latest", "oldest", "title"], Query()] = "latest",
    category: Annotated[UUID | None, Query(description="Category ID filter")] = None,
    is_published: Annotated[bool | None, Query(alias="isPublished")] = None,
    is_private: Annotated[bool | None, Query(alias="isPrivate")] = None,
) -> BlogListQuery:
    """
    Dependency to construct `BlogListQuery` from query parameters.

    Returns
    -------
    BlogListQuery
        Aggregated query parameters object.
    """
    return BlogListQuery(
        page=page.page,
        limit=page.limit,
        sort=sort,
        category=category,
        is_published=is_published,
        is_private=is_private,
    )


BlogQueryListDep = Annotated[BlogListQuery, Depends(get_blog_list_query)]
