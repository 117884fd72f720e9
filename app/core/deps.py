"""
FastAPI dependencies for authentication and authorization.

A bearer token is optional on every request. Routes pick the dependency that
matches the access they require:

- get_logged_in_user: any valid token
- get_admin_user: a token whose `is_admin` claim is true
- get_correct_user_or_admin: an admin, or the user named in the path

Every failure is a 401, including a valid token without enough privileges.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import UnauthorizedError
from app.core.security import JWTError, decode_token
from app.schemas.user import CurrentUser

logger = logging.getLogger(__name__)

# auto_error=False: anonymous requests reach the route dependencies below
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """
    Extract the user from the Authorization header, if any.

    Invalid or expired tokens are treated the same as no token.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Ignoring invalid token: {e}")
        return None

    username = payload.get("sub")
    if username is None:
        return None

    return CurrentUser(username=username, is_admin=bool(payload.get("is_admin", False)))


def get_logged_in_user(
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> CurrentUser:
    """Require any authenticated user."""
    if user is None:
        raise UnauthorizedError("Authentication required")
    return user


def get_admin_user(
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> CurrentUser:
    """Require an authenticated admin."""
    if user is None or not user.is_admin:
        raise UnauthorizedError("Admin privileges required")
    return user


def get_correct_user_or_admin(
    username: str,
    user: CurrentUser = Depends(get_logged_in_user),
) -> CurrentUser:
    """Require an admin, or the user whose username is in the path."""
    if not (user.is_admin or user.username == username):
        raise UnauthorizedError("Not allowed to access this user")
    return user
