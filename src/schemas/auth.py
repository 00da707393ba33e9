"""Authentication schemas."""

from pydantic import BaseModel


class IdentityResponse(BaseModel):
    """The identity the bearer token resolves to."""

    user_id: str
    email: str
    name: str | None = None
    picture: str | None = None
