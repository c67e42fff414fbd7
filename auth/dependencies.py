"""
FastAPI dependencies for authentication.

Provides ``db_session`` and ``get_current_user_id`` dependencies that
are used across all protected routes.
"""

from __future__ import annotations

import uuid
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenError, verify_token
from core.errors import InvalidCredential, MissingCredential, StaleCredential
from database.helpers import get_user
from database.session import get_db_session

# Only declares the scheme in the OpenAPI docs; the header is checked below.
_bearer_scheme = HTTPBearer(auto_error=False)
_BEARER_PREFIX = "Bearer "


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_user_id(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    _credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    session: AsyncSession = Depends(db_session),
) -> uuid.UUID:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id``.

    The account is re-read so tokens of deleted users stop working.
    Expired and forged tokens are reported the same way.
    """
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise MissingCredential()
    token = authorization[len(_BEARER_PREFIX):].strip()
    if not token:
        raise MissingCredential()

    try:
        user_id = uuid.UUID(verify_token(token))
    except (TokenError, ValueError) as exc:
        raise InvalidCredential() from exc

    if await get_user(session, user_id) is None:
        raise StaleCredential()
    return user_id
