"""
Pydantic schemas for request bodies and response payloads.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, field_validator
from pydantic.functional_validators import AfterValidator, BeforeValidator

from auth.password import MAX_PASSWORD_BYTES


def _normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


# trimmed and lowercased before email-validator sees it
Email = Annotated[EmailStr, BeforeValidator(_normalize_email)]


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    username: str
    email: Email
    password: str = Field(..., min_length=6)

    @field_validator("username")
    @classmethod
    def _username_length(cls, v: str) -> str:
        v = v.strip()
        if not 3 <= len(v) <= 30:
            raise ValueError("Username must be between 3 and 30 characters")
        return v

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    """Public projection of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID = Field(validation_alias="user_id")
    username: str
    email: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


# ═══════════════════════════════════════════════════════════════════════════════
# Tasks
# ═══════════════════════════════════════════════════════════════════════════════


def _clean_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Task title is required")
    if len(v) > 200:
        raise ValueError("Task title cannot exceed 200 characters")
    return v


def _clean_description(v: str) -> str:
    v = v.strip()
    if len(v) > 1000:
        raise ValueError("Task description cannot exceed 1000 characters")
    return v


Title = Annotated[str, AfterValidator(_clean_title)]
Description = Annotated[str, AfterValidator(_clean_description)]


class TaskCreate(BaseModel):
    title: Title
    description: Description = ""
    completed: StrictBool = False


class TaskUpdate(BaseModel):
    """Every field optional; only the ones sent are applied."""

    title: Optional[Title] = None
    description: Optional[Description] = None
    completed: Optional[StrictBool] = None

    def changes(self) -> dict:
        # explicit nulls count as "not sent"
        return {
            k: v
            for k, v in self.model_dump(exclude_unset=True).items()
            if v is not None
        }


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID = Field(validation_alias="task_id")
    title: str
    description: str
    completed: bool
    user_id: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # SQLite hands back naive values for timezone-aware columns
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class TaskResponse(BaseModel):
    message: str
    task: TaskOut


class TaskListResponse(BaseModel):
    message: str
    count: int
    tasks: List[TaskOut]
