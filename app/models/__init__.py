"""Database models for the application."""

from app.models.author import AuthorDB
from app.models.blog import BlogDB
from app.models.category import CategoryDB
from app.models.comment import CommentDB
from app.models.image_file import ImageFileDB
from app.models.tag import TagDB
from app.models.viewer import ViewerDB

__all__ = [
    "AuthorDB",
    "BlogDB",
    "CategoryDB",
    "CommentDB",
    "ImageFileDB",
    "TagDB",
    "ViewerDB",
]
