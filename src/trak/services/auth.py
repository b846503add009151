"""Authentication and user management services."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import Session, select

from ..logging_config import get_logger
from ..models.user import User

SessionFactory = Callable[[], Session]

logger = get_logger(__name__)

_hasher = PasswordHasher()
MIN_PASSWORD_LENGTH = 6
MAX_DISPLAY_NAME_LENGTH = 80


class UserNotFound(LookupError):
    """Raised when a user id no longer matches a stored account."""


def get_user(user_id: int, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by id."""
    with session_factory() as session:
        user = session.get(User, user_id)
        if user:
            session.expunge(user)
        return user


def get_user_by_username(username: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by username."""
    username = username.strip()
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user:
            session.expunge(user)
        return user


def create_user(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> User:
    """Create a new user with hashed password."""

    username = username.strip()
    if not username:
        raise ValueError("Username is required")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            raise ValueError("Username already exists")
        user = User(username=username, password_hash=password_hash)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("User created", extra={"user_id": user.id})
    return user


def authenticate(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    username = username.strip()
    if not username:
        return None
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            logger.warning("Login for unknown user")
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            logger.warning("Login with bad password", extra={"user_id": user.id})
            return None

        user.last_login = datetime.now()
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


def update_profile(
    user_id: int,
    *,
    display_name: Optional[str],
    session_factory: SessionFactory,
) -> User:
    """Set or clear the display name shown instead of the username."""

    display_name = (display_name or "").strip() or None
    if display_name is not None and len(display_name) > MAX_DISPLAY_NAME_LENGTH:
        raise ValueError(f"Display name must be at most {MAX_DISPLAY_NAME_LENGTH} characters")
    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise UserNotFound(f"User {user_id} not found")
        user.display_name = display_name
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("Profile updated", extra={"user_id": user_id})
    return user


__all__ = [
    "UserNotFound",
    "authenticate",
    "create_user",
    "get_user",
    "get_user_by_username",
    "update_profile",
]
