"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_identity
from src.database import get_db
from src.models.user_profile import UserProfile
from src.schemas.profile import ProfileResponse, ProfileUpdate
from src.services.auth import Identity

router = APIRouter(prefix="/api/profile", tags=["profile"])


def get_or_create_profile(db: Session, identity: Identity) -> UserProfile:
    """Get the caller's profile, creating it from identity claims on first use."""
    profile = db.query(UserProfile).filter(UserProfile.user_id == identity.user_id).first()
    if profile is None:
        profile = UserProfile(
            user_id=identity.user_id,
            email=identity.email,
            display_name=identity.name,
            photo_url=identity.picture,
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
    elif profile.email != identity.email:
        profile.email = identity.email
        db.commit()
        db.refresh(profile)
    return profile


@router.get("", response_model=ProfileResponse)
def get_profile(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the current user's profile."""
    return get_or_create_profile(db, identity)


@router.put("", response_model=ProfileResponse)
def update_profile(
    profile_data: ProfileUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the current user's profile."""
    profile = get_or_create_profile(db, identity)

    if profile_data.display_name is not None:
        profile.display_name = profile_data.display_name
    if profile_data.photo_url is not None:
        profile.photo_url = str(profile_data.photo_url)

    db.commit()
    db.refresh(profile)
    return profile
