"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import functools

import bcrypt

from config.settings import config

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


@functools.lru_cache(maxsize=1)
def dummy_hash() -> str:
    """A throwaway hash at the configured cost, checked when no account matches."""
    return bcrypt.hashpw(b"no-such-account", bcrypt.gensalt(rounds=config.bcrypt_rounds)).decode()


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (fresh salt per call)."""
    raw = password.encode()
    if not raw:
        raise ValueError("password must not be empty")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=config.bcrypt_rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison against a bcrypt hash.

    A mismatch returns ``False``; a malformed ``password_hash`` raises
    ``ValueError``.
    """
    raw = password.encode()
    if not raw or len(raw) > MAX_PASSWORD_BYTES:
        # hash_password never accepts these, so nothing stored can match
        bcrypt.checkpw(b"x", password_hash.encode())
        return False
    return bcrypt.checkpw(raw, password_hash.encode())
