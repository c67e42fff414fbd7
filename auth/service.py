"""
Registration and login flows.

Both return ``(token, user)``; routes decide how the user is projected.
"""

from __future__ import annotations

import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import create_token
from auth.password import dummy_hash, hash_password, verify_password
from core.errors import DuplicateIdentity, InvalidCredentials
from database.helpers import create_user, find_user_by_email_or_username, get_user_by_email
from database.models import User

logger = logging.getLogger(__name__)


async def register_user(
    session: AsyncSession,
    username: str,
    email: str,
    password: str,
) -> Tuple[str, User]:
    """
    Create an account and issue its first token.

    If the email and the username are both taken, the email collision
    is the one reported.
    """
    existing = await find_user_by_email_or_username(session, email, username)
    if existing is not None:
        if existing.email == email:
            raise DuplicateIdentity("Email is already registered")
        raise DuplicateIdentity("Username is already taken")

    password_hash = hash_password(password)
    try:
        user = await create_user(session, username, email, password_hash)
    except IntegrityError as exc:
        # lost a race with a concurrent registration
        await session.rollback()
        logger.info("Registration for %s hit a unique constraint", email)
        raise DuplicateIdentity("Email or username is already registered") from exc

    token = create_token(str(user.user_id))
    logger.info("Registered user %s (%s)", user.username, user.user_id)
    return token, user


async def login_user(
    session: AsyncSession,
    email: str,
    password: str,
) -> Tuple[str, User]:
    """Check credentials; unknown email and wrong password fail identically."""
    user = await get_user_by_email(session, email, with_password=True)
    if user is None:
        # same bcrypt cost as a real mismatch
        verify_password(password, dummy_hash())
        logger.info("Failed login for %s", email)
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise InvalidCredentials()

    token = create_token(str(user.user_id))
    logger.info("Login: %s (%s)", user.username, user.user_id)
    return token, user
