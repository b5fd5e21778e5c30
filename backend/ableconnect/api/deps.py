"""
Request dependencies shared by every router.

Resolves the bearer token to a User row and gates routes by role.
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends, Path
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ableconnect.core.exceptions import Forbidden, NotAuthenticated
from ableconnect.core.security import decode_access_token
from ableconnect.db.base import MAX_ID
from ableconnect.db.session import get_db
from ableconnect.models import User
from ableconnect.services.email import Mailer, build_mailer
from ableconnect.services.storage import FileStorage, build_storage

# auto_error is off so a missing header yields our own 401 body
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

# Integer path ids; values outside the key range are rejected as a bad request
ResourceId = Annotated[int, Path(ge=1, le=MAX_ID)]


def _resolve_user(token: Optional[str], db: Session) -> Optional[User]:
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        return None
    return db.query(User).filter(User.id == user_id).first()


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user from the bearer token.

    Raises NotAuthenticated (401) if the header is missing, the token is
    invalid or expired, or the user no longer exists.
    """
    if not token:
        raise NotAuthenticated()
    user = _resolve_user(token, db)
    if user is None:
        raise NotAuthenticated("Unauthorized")
    return user


async def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user, but anonymous callers get None instead of a 401."""
    return _resolve_user(token, db)


def require_roles(*roles: str, detail: Optional[str] = None) -> Callable:
    """
    Build a dependency that only lets the given roles through.

    Usable per route (``Depends(require_roles("employer"))``) or on a whole
    router via ``dependencies=[...]``.
    """
    message = detail or f"Not authorized as {' or '.join(roles)}"

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise Forbidden(message)
        return current_user

    return checker


def get_mailer() -> Mailer:
    return build_mailer()


def get_storage() -> FileStorage:
    return build_storage()
