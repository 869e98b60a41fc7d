from app.routes.author import router as author_router
from app.routes.blog import router as blog_router
from app.routes.category import router as category_router
from app.routes.comment import router as comment_router
from app.routes.image_file import router as image_file_router
from app.routes.tag import router as tag_router
from app.routes.viewer import router as viewer_router

__all__ = [
    "author_router",
    "blog_router",
    "category_router",
    "comment_router",
    "image_file_router",
    "tag_router",
    "viewer_router",
]
