"""Response envelopes returned by the API routes."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from inkwell.schemas.blog import Blog, BlogWithAuthor
from inkwell.schemas.user import User


class UserResponse(BaseModel):
    user: User


class BlogResponse(BaseModel):
    blog: Blog


class BlogDetailResponse(BaseModel):
    blog: BlogWithAuthor


class BlogListResponse(BaseModel):
    blogs: list[Blog]


class PublishedBlogsResponse(BaseModel):
    blogs: list[BlogWithAuthor]


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Liveness report; ``status`` degrades when storage is unreachable."""

    status: Literal["ok", "degraded"]
    timestamp: datetime
    version: str
    storage: Literal["ok", "unavailable"]
