"""User database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from inkwell.utils.helpers import utc_now


class UserDB(SQLModel, table=True):
    """
    User database model.

    Rows are created on first authenticated contact (or by legacy
    registration) and never updated afterwards.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        sa_column=Column(String(128), primary_key=True, nullable=False),
        description="User ID (issued by the identity provider or generated)",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique)",
    )
    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
