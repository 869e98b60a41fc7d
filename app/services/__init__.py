from app.services.auth import AuthService
from app.services.blog import BlogService
from app.services.category import CategoryService
from app.services.comment import CommentService
from app.services.image_file import ImageFileService
from app.services.media import MediaService
from app.services.tag import TagService
from app.services.user import AuthorService, ViewerService

__all__ = [
    "AuthService",
    "AuthorService",
    "BlogService",
    "CategoryService",
    "CommentService",
    "ImageFileService",
    "MediaService",
    "TagService",
    "ViewerService",
]
