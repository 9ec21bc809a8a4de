"""User schemas for the Inkwell backend."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

from inkwell.configs import DISPLAY_NAME_MAX_LENGTH

DisplayName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=DISPLAY_NAME_MAX_LENGTH),
]


class UserCreate(BaseModel):
    """
    Payload for provisioning a user.

    ``id`` is only set when the identity provider already issued one
    (auto-provisioning, legacy ``x-user-id`` registration).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(
        default=None,
        min_length=1,
        max_length=128,
        description="External user ID",
    )
    email: EmailStr = Field(..., description="Email address (unique)", examples=["ada@example.com"])
    name: DisplayName = Field(..., description="Display name", examples=["Ada Lovelace"])


class User(BaseModel):
    """Stored user record."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    email: str
    name: str
    created_at: datetime = Field(alias="createdAt")
