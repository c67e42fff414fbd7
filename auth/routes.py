"""
Auth API routes — register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session
from auth.service import login_user, register_user
from utils.schemas import AuthResponse, LoginRequest, RegisterRequest, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    token, user = await register_user(session, req.username, req.email, req.password)
    return {
        "message": "User registered successfully",
        "token": token,
        "user": UserOut.model_validate(user),
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    token, user = await login_user(session, req.email, req.password)
    return {
        "message": "Login successful",
        "token": token,
        "user": UserOut.model_validate(user),
    }
