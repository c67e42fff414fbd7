"""
Database helper functions: user lookups and owner-scoped task access.

Every task query is filtered by ``user_id`` in the same statement that
selects, updates or deletes the row, so a task owned by someone else is
indistinguishable from a missing one.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from core.errors import MalformedId
from database.models import Task, User

logger = logging.getLogger(__name__)

_TASK_FIELDS = ("title", "description", "completed")


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


def parse_task_id(value: str) -> uuid.UUID:
    """Parse a path parameter into a task id, raising ``MalformedId``."""
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise MalformedId() from exc


# ── Users ──────────────────────────────────────────────────────────────


async def find_user_by_email_or_username(
    session: AsyncSession,
    email: str,
    username: str,
) -> Optional[User]:
    """Return the first user whose email or username matches."""
    result = await session.execute(
        select(User)
        .where(or_(User.email == email, User.username == username))
        .order_by((User.email == email).desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_user_by_email(
    session: AsyncSession,
    email: str,
    with_password: bool = False,
) -> Optional[User]:
    stmt = select(User).where(User.email == email)
    if with_password:
        stmt = stmt.options(undefer(User.password_hash))
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: str | uuid.UUID) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.user_id == _to_uuid(user_id))
    )
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
) -> User:
    user = User(
        user_id=uuid.uuid4(),
        username=username,
        email=email,
        password_hash=password_hash,
    )
    session.add(user)
    await session.flush()
    await session.commit()
    return user


# ── Tasks ──────────────────────────────────────────────────────────────


async def create_task(
    session: AsyncSession,
    user_id: uuid.UUID,
    title: str,
    description: str = "",
    completed: bool = False,
) -> Task:
    task = Task(
        task_id=uuid.uuid4(),
        user_id=user_id,
        title=title,
        description=description,
        completed=completed,
    )
    session.add(task)
    await session.flush()
    await session.commit()
    logger.info("Created task %s for user %s", task.task_id, user_id)
    return task


async def list_tasks(session: AsyncSession, user_id: uuid.UUID) -> List[Task]:
    """All tasks owned by ``user_id``, newest first."""
    result = await session.execute(
        select(Task)
        .where(Task.user_id == user_id)
        .order_by(Task.created_at.desc())
    )
    return list(result.scalars().all())


async def get_task(
    session: AsyncSession,
    user_id: uuid.UUID,
    task_id: uuid.UUID,
) -> Optional[Task]:
    result = await session.execute(
        select(Task).where(Task.task_id == task_id, Task.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def update_task(
    session: AsyncSession,
    user_id: uuid.UUID,
    task_id: uuid.UUID,
    changes: Dict[str, Any],
) -> Optional[Task]:
    """
    Apply ``changes`` to the caller's task in one ``UPDATE … RETURNING``.

    Keys outside title/description/completed are ignored.  With nothing
    to change, the task is returned as stored.  ``None`` means no task
    with that id belongs to ``user_id``.
    """
    values = {k: v for k, v in changes.items() if k in _TASK_FIELDS}
    if not values:
        return await get_task(session, user_id, task_id)

    result = await session.execute(
        update(Task)
        .where(Task.task_id == task_id, Task.user_id == user_id)
        .values(**values)
        .returning(Task)
        .execution_options(synchronize_session=False)
    )
    task = result.scalar_one_or_none()
    if task is not None:
        await session.commit()
        logger.info("Updated task %s (%s)", task_id, ", ".join(sorted(values)))
    return task


async def delete_task(
    session: AsyncSession,
    user_id: uuid.UUID,
    task_id: uuid.UUID,
) -> Optional[Task]:
    """Delete the caller's task and return it, or ``None`` if not theirs."""
    result = await session.execute(
        delete(Task)
        .where(Task.task_id == task_id, Task.user_id == user_id)
        .returning(Task)
        .execution_options(synchronize_session=False)
    )
    task = result.scalar_one_or_none()
    if task is not None:
        await session.commit()
        logger.info("Deleted task %s for user %s", task_id, user_id)
    return task
