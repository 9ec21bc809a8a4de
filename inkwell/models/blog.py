"""Blog database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from inkwell.utils.helpers import utc_now

# JSONB on Postgres, plain JSON elsewhere (sqlite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    ``views`` is an integer column updated in place with ``views + 1`` so
    concurrent reads never lose increments.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_published_created", "is_published", "created_at"),
        Index("ix_blogs_author_updated", "author_id", "updated_at"),
    )

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        sa_column=Column(String(128), primary_key=True, nullable=False),
        description="Blog ID",
    )
    author_id: str = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.id)",
    )

    title: str = Field(sa_column=Column(String(200), nullable=False))
    content: str = Field(sa_column=Column(Text, nullable=False))
    excerpt: str | None = Field(default=None, sa_column=Column(Text))
    category: str | None = Field(default=None, sa_column=Column(String(100)))
    theme: str = Field(
        default="modern",
        sa_column=Column(String(20), nullable=False, server_default="modern"),
    )
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSONList, nullable=False))
    is_published: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="false"),
    )
    views: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
    )
    media_urls: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSONList, nullable=False),
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
