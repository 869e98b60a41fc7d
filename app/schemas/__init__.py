from app.schemas.auth import LoginRequest, Principal, Role, Token, TokenData
from app.schemas.blog import BlogCreate, BlogResponse, BlogUpdate, PublishAction
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.comment import CommentCreate, CommentResponse, CommentUpdate, ReplyCreate
from app.schemas.common import MessageResponse, TotalResponse
from app.schemas.image_file import Credit, ImageFileResponse, ImageFileUpdate, ReferencedDoc
from app.schemas.tag import TagCreate, TagResponse, TagUpdate
from app.schemas.user import (
    AuthorRegister,
    AuthorResponse,
    AuthorUpdate,
    PasswordChange,
    PasswordConfirm,
    ViewerRegister,
    ViewerResponse,
    ViewerUpdate,
)

__all__ = [
    "AuthorRegister",
    "AuthorResponse",
    "AuthorUpdate",
    "BlogCreate",
    "BlogResponse",
    "BlogUpdate",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "CommentCreate",
    "CommentResponse",
    "CommentUpdate",
    "Credit",
    "ImageFileResponse",
    "ImageFileUpdate",
    "LoginRequest",
    "MessageResponse",
    "PasswordChange",
    "PasswordConfirm",
    "Principal",
    "PublishAction",
    "ReferencedDoc",
    "ReplyCreate",
    "Role",
    "TagCreate",
    "TagResponse",
    "TagUpdate",
    "Token",
    "TokenData",
    "TotalResponse",
    "ViewerRegister",
    "ViewerResponse",
    "ViewerUpdate",
]
