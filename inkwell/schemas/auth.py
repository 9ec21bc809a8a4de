from pydantic import BaseModel


class Identity(BaseModel):
    """Claims returned by an identity provider for a verified credential."""

    uid: str
    email: str | None = None
    name: str | None = None
