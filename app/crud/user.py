"""
CRUD operations for users.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from app.core.database import execute
from app.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import sql_for_partial_update
from app.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

USER_COLUMNS = ('username, first_name AS "firstName", last_name AS "lastName", '
                'email, is_admin AS "isAdmin"')

UPDATE_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}
UPDATABLE_FIELDS = ("firstName", "lastName", "password", "email", "isAdmin")


def _normalize(row: Dict[str, Any]) -> Dict[str, Any]:
    # SQLite returns booleans as 0/1
    row["isAdmin"] = bool(row["isAdmin"])
    return row


def register(db: Session, user_data: UserRegisterRequest, is_admin: bool = False) -> Dict[str, Any]:
    """
    Create a user with a bcrypt-hashed password.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        BadRequestError: The username is taken
    """
    duplicate = execute(
        db,
        "SELECT username FROM users WHERE username = $1",
        [user_data.username],
    )
    if duplicate:
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    rows = execute(
        db,
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            user_data.username,
            get_password_hash(user_data.password),
            user_data.first_name,
            user_data.last_name,
            user_data.email,
            is_admin,
        ],
    )

    logger.info(f"Registered user {user_data.username} (admin={is_admin})")
    return _normalize(rows[0])


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: Unknown user or wrong password
    """
    rows = execute(
        db,
        f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1",
        [username],
    )
    if rows:
        user = rows[0]
        hashed = user.pop("password")
        if verify_password(password, hashed):
            return _normalize(user)

    raise UnauthorizedError("Invalid username/password")


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All users, ordered by username."""
    rows = execute(db, f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
    return [_normalize(row) for row in rows]


def get(db: Session, username: str) -> Dict[str, Any]:
    rows = execute(db, f"SELECT {USER_COLUMNS} FROM users WHERE username = $1", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")
    return _normalize(rows[0])


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user.

    Data can include {firstName, lastName, password, email, isAdmin}. A new
    password is hashed before it is stored.

    Raises:
        BadRequestError: data is empty or names a field that cannot be updated
        NotFoundError: No user with this username
    """
    if data and data.get("password") is not None:
        data = {**data, "password": get_password_hash(data["password"])}

    set_cols, values = sql_for_partial_update(data, UPDATE_COLUMNS, allowed=UPDATABLE_FIELDS)
    username_idx = len(values) + 1

    rows = execute(
        db,
        f"""UPDATE users
            SET {set_cols}
            WHERE username = ${username_idx}
            RETURNING {USER_COLUMNS}""",
        [*values, username],
    )
    if not rows:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Updated user {username}: {', '.join(data)}")
    return _normalize(rows[0])


def remove(db: Session, username: str) -> None:
    rows = execute(db, "DELETE FROM users WHERE username = $1 RETURNING username", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Deleted user {username}")
