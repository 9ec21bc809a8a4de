from inkwell.schemas.auth import Identity
from inkwell.schemas.blog import (
    DEFAULT_THEME,
    Blog,
    BlogCreate,
    BlogUpdate,
    BlogWithAuthor,
    Theme,
)
from inkwell.schemas.responses import (
    BlogDetailResponse,
    BlogListResponse,
    BlogResponse,
    HealthResponse,
    MessageResponse,
    PublishedBlogsResponse,
    UserResponse,
)
from inkwell.schemas.user import User, UserCreate

__all__ = [
    "DEFAULT_THEME",
    "Blog",
    "BlogCreate",
    "BlogDetailResponse",
    "BlogListResponse",
    "BlogResponse",
    "BlogUpdate",
    "BlogWithAuthor",
    "HealthResponse",
    "Identity",
    "MessageResponse",
    "PublishedBlogsResponse",
    "Theme",
    "User",
    "UserCreate",
    "UserResponse",
]
