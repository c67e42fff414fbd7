"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).

Payload claims:
  • ``user_id``: the authenticated user's id (UUID string)
  • ``iat``: issued-at, epoch seconds
  • ``exp``: expiry, ``iat + config.jwt_expiry_seconds``
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

from config.settings import config

_TOKEN_SECRET = config.jwt_secret
_TOKEN_EXPIRY_SECONDS = config.jwt_expiry_seconds


class TokenError(Exception):
    """Base class for token verification failures."""


class MalformedToken(TokenError):
    """Unparsable structure, bad signature, or missing claims."""


class ExpiredToken(TokenError):
    """Signature is valid but ``exp`` is in the past."""


def _sign(raw: bytes) -> str:
    return hmac.new(_TOKEN_SECRET.encode(), raw, hashlib.sha256).hexdigest()


def create_token(user_id: str, issued_at: Optional[int] = None) -> str:
    """Create a signed token containing ``user_id``, issue time and expiry."""
    iat = int(time.time()) if issued_at is None else int(issued_at)
    payload = {
        "user_id": str(user_id),
        "iat": iat,
        "exp": iat + _TOKEN_EXPIRY_SECONDS,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return urlsafe_b64encode(raw).decode() + "." + _sign(raw)


def verify_token(token: str, now: Optional[float] = None) -> str:
    """
    Verify token and return ``user_id``.

    Raises ``MalformedToken`` when the token cannot be parsed or its
    signature does not match, ``ExpiredToken`` when it is past ``exp``.
    """
    parts = token.split(".", 1)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedToken("bad format")
    try:
        raw = urlsafe_b64decode(parts[0].encode())
    except (ValueError, binascii.Error) as exc:
        raise MalformedToken("bad encoding") from exc

    if not hmac.compare_digest(parts[1].encode(), _sign(raw).encode()):
        raise MalformedToken("bad signature")

    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise MalformedToken("bad payload") from exc
    if not isinstance(payload, dict):
        raise MalformedToken("bad payload")

    user_id = payload.get("user_id")
    exp = payload.get("exp")
    if not isinstance(user_id, str) or not isinstance(exp, int):
        raise MalformedToken("missing claims")

    current = time.time() if now is None else now
    if exp < current:
        raise ExpiredToken("token expired")
    return user_id
