"""
Blog schemas for the Inkwell backend.

Request payloads (``BlogCreate``, ``BlogUpdate``) and the stored record
(``Blog``/``BlogWithAuthor``). Wire names are camelCase; Python attributes
are snake_case and both are accepted on input.
"""

from datetime import datetime
from re import compile as re_compile
from typing import Annotated, Any, Literal, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    StringConstraints,
    field_validator,
    model_validator,
)

from inkwell.schemas.user import User
from inkwell.utils.helpers import make_excerpt

Theme = Literal["modern", "dark", "professional", "creative"]
DEFAULT_THEME: Theme = "modern"

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Content = Annotated[str, StringConstraints(min_length=1)]

LEADING_INT = re_compile(r"[+-]?\d+")


class BlogCreate(BaseModel):
    """
    Blog creation payload.

    The author is always the authenticated caller, so an ``authorId`` in the
    body is ignored rather than trusted.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Title = Field(..., description="Blog title", examples=["My first post"])
    content: Content = Field(..., description="Rich-text HTML body", examples=["<p>Hello</p>"])
    excerpt: str | None = Field(
        default=None,
        description="Short summary (derived from the content when omitted)",
    )
    category: str | None = Field(default=None, max_length=100, description="Free-form category")
    theme: Theme = Field(default=DEFAULT_THEME, description="Presentation theme")
    tags: list[str] = Field(default_factory=list, description="Ordered tags")
    is_published: bool = Field(default=False, alias="isPublished")
    media_urls: list[str] = Field(
        default_factory=list,
        alias="mediaUrls",
        description="Attachment URLs",
    )

    @field_validator("theme", mode="before")
    @classmethod
    def default_theme(cls, value: Any) -> Any:
        return DEFAULT_THEME if value is None else value

    @field_validator("tags", "media_urls", mode="before")
    @classmethod
    def default_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def fill_excerpt(self) -> Self:
        """Derive the excerpt from the content when none was supplied."""
        if not self.excerpt or not self.excerpt.strip():
            self.excerpt = make_excerpt(self.content)
        return self


class BlogUpdate(BaseModel):
    """
    Partial blog update.

    Only fields present in the payload are applied. Unknown fields are
    rejected, which keeps ``authorId``/``views``/``id`` immutable.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: Title | None = None
    content: Content | None = None
    excerpt: str | None = None
    category: str | None = Field(default=None, max_length=100)
    theme: Theme | None = None
    tags: list[str] | None = None
    is_published: bool | None = Field(default=None, alias="isPublished")
    media_urls: list[str] | None = Field(default=None, alias="mediaUrls")

    @field_validator("title", "content", "theme", "tags", "is_published", "media_urls")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            mssg = "Field may not be null"
            raise ValueError(mssg)
        return value

    def changes(self) -> dict[str, Any]:
        """Return the explicitly provided fields keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class Blog(BaseModel):
    """Stored blog record."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    title: str
    content: str
    excerpt: str | None = None
    author_id: str = Field(alias="authorId")
    category: str | None = None
    theme: Theme = DEFAULT_THEME
    tags: list[str] = Field(default_factory=list)
    is_published: bool = Field(default=False, alias="isPublished")
    views: NonNegativeInt = 0
    media_urls: list[str] = Field(default_factory=list, alias="mediaUrls")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("views", mode="before")
    @classmethod
    def coerce_views(cls, value: Any) -> Any:
        # Legacy rows keep the counter as text; unreadable text counts as 0
        if isinstance(value, str):
            match = LEADING_INT.match(value.strip())
            return max(int(match.group()), 0) if match else 0
        return 0 if value is None else value

    @field_validator("theme", mode="before")
    @classmethod
    def default_theme(cls, value: Any) -> Any:
        return DEFAULT_THEME if value is None else value

    @field_validator("tags", "media_urls", mode="before")
    @classmethod
    def default_list(cls, value: Any) -> Any:
        return [] if value is None else value


class BlogWithAuthor(Blog):
    """Blog joined with its resolved author."""

    author: User
