"""
Authentication dependencies for FastAPI routes.

Tokens arrive as `Authorization: Bearer <jwt>` with the user id in `sub`.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.repositories import UserRepository

from ..database import get_db
from ..models import User
from .jwt import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the authenticated user from the bearer token.

    Missing, invalid or expired tokens and unknown users all yield 401.
    """
    if not token:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_access_token(token)
    except ValueError:
        raise _unauthorized("Invalid authentication credentials") from None

    user_id = payload.get("sub")
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid authentication credentials") from None

    user = UserRepository(db).get_by_id(user_id)
    if not user:
        raise _unauthorized("User not found")
    return user
