# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthorDep,
    AuthorServiceDep,
    AuthServiceDep,
    BlogListQuery,
    BlogQueryListDep,
    BlogServiceDep,
    CategoryServiceDep,
    CommentServiceDep,
    ImageFileServiceDep,
    PageQuery,
    PageQueryDep,
    PrincipalDep,
    SessionDep,
    StorageDep,
    TagServiceDep,
    ViewerDep,
    ViewerServiceDep,
    ensure_self,
    get_current_author,
    get_current_principal,
    get_current_viewer,
    get_storage,
)

__all__ = [
    "AuthServiceDep",
    "AuthorDep",
    "AuthorServiceDep",
    "BlogListQuery",
    "BlogQueryListDep",
    "BlogServiceDep",
    "CategoryServiceDep",
    "CommentServiceDep",
    "ImageFileServiceDep",
    "PageQuery",
    "PageQueryDep",
    "PrincipalDep",
    "SessionDep",
    "StorageDep",
    "TagServiceDep",
    "ViewerDep",
    "ViewerServiceDep",
    "ensure_self",
    "get_current_author",
    "get_current_principal",
    "get_current_viewer",
    "get_storage",
]
