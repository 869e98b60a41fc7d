"""Repository pattern implementations for database operations."""

from app.repositories.author import AuthorRepository
from app.repositories.base import BaseRepository
from app.repositories.blog import BlogRepository
from app.repositories.category import CategoryRepository
from app.repositories.comment import CommentRepository
from app.repositories.image_file import ImageFileRepository
from app.repositories.tag import TagRepository
from app.repositories.viewer import ViewerRepository

__all__ = [
    "AuthorRepository",
    "BaseRepository",
    "BlogRepository",
    "CategoryRepository",
    "CommentRepository",
    "ImageFileRepository",
    "TagRepository",
    "ViewerRepository",
]
