"""Identity handling for bearer tokens issued by the identity provider."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from src.config import get_settings

settings = get_settings()


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of a request.

    ``principals`` holds every string a list share may have been recorded
    under for this identity: the stable user id and the lowercased email.
    Shares created by email invite before the invitee ever signed in still
    match once they do.
    """

    user_id: str
    email: str
    name: str | None = None
    picture: str | None = None
    principals: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", self.email.strip().lower())
        object.__setattr__(self, "principals", tuple(dict.fromkeys((self.user_id, self.email))))


def create_access_token(
    user_id: str,
    email: str,
    name: str | None = None,
    picture: str | None = None,
) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": user_id,
        "email": email,
        "exp": expire,
    }
    if name is not None:
        to_encode["name"] = name
    if picture is not None:
        to_encode["picture"] = picture
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def identity_from_payload(payload: dict) -> Identity | None:
    """Build an identity from decoded token claims, or None if claims are missing."""
    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        return None
    return Identity(
        user_id=str(user_id),
        email=email,
        name=payload.get("name"),
        picture=payload.get("picture"),
    )
