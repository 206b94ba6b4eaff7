"""API dependencies for resolving the requesting actor."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.access.actor import ANONYMOUS, Actor
from app.core.database import get_db
from app.models.profile import Profile
from app.services.auth import decode_token, get_user

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_actor(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Actor:
    """Actor for the bearer token, or the anonymous actor when there is none."""
    if not token:
        return ANONYMOUS

    token_data = decode_token(token)
    user = get_user(db, token_data.user_id)
    profile = db.get(Profile, token_data.user_id)
    if user is None or not user.is_active or profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Actor.authenticated(profile.id, profile.role)


def require_actor(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Reject anonymous requests with 401."""
    if actor.is_anonymous:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor
