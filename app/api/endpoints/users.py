"""
User management endpoints.

Creating and listing users is admin only; a user may read, update and
delete their own account.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user, get_correct_user_or_admin
from app.core.exceptions import UnauthorizedError
from app.core.security import create_access_token
from app.crud import user as user_crud
from app.schemas.common import DeletedResponse
from app.schemas.user import (
    CurrentUser,
    UserCreateRequest,
    UserCreatedResponse,
    UserEnvelope,
    UserListEnvelope,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreatedResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user)
):
    """Create a user, optionally an admin. Admin only."""
    user = user_crud.register(db, request, is_admin=request.is_admin)
    token = create_access_token(user["username"], is_admin=user["isAdmin"])
    return {"user": user, "access_token": token}


@router.get("/", response_model=UserListEnvelope)
def list_users(
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user)
):
    """List all users. Admin only."""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_correct_user_or_admin)
):
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_correct_user_or_admin)
):
    """
    Partially update a user.

    Fields: firstName, lastName, password, email, isAdmin. Only admins may
    change isAdmin.
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    if "isAdmin" in data and not current_user.is_admin:
        raise UnauthorizedError("Only admins can change admin status")

    user = user_crud.update(db, username, data)
    return {"user": user}


@router.delete("/{username}", response_model=DeletedResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_correct_user_or_admin)
):
    user_crud.remove(db, username)
    logger.info(f"User {username} deleted by {current_user.username}")
    return {"deleted": username}
