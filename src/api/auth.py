"""Authentication API endpoints.

Sign-in happens at the identity provider; these routes only expose the
identity a bearer token resolves to.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_identity
from src.schemas.auth import IdentityResponse
from src.services.auth import Identity

router = APIRouter(prefix="/api", tags=["auth"])


@router.get("/users/me", response_model=IdentityResponse)
async def get_me(
    identity: Annotated[Identity, Depends(get_current_identity)],
):
    """Get current user information."""
    return IdentityResponse(
        user_id=identity.user_id,
        email=identity.email,
        name=identity.name,
        picture=identity.picture,
    )


@router.post("/logout")
async def logout(
    identity: Annotated[Identity, Depends(get_current_identity)],
):
    """Logout (client should discard token)."""
    return {"message": "Logged out successfully"}
