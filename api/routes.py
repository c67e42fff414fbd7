"""
Task REST routes.  Every endpoint is gated by ``get_current_user_id`` and
scoped to the caller's own tasks.

Route prefix: /api/tasks
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user_id
from core.errors import NotFound
from database.helpers import (
    create_task,
    delete_task,
    list_tasks,
    parse_task_id,
    update_task,
)
from utils.schemas import (
    TaskCreate,
    TaskListResponse,
    TaskOut,
    TaskResponse,
    TaskUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create(
    body: TaskCreate,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    task = await create_task(
        session,
        user_id,
        title=body.title,
        description=body.description,
        completed=body.completed,
    )
    return {"message": "Task created successfully", "task": TaskOut.model_validate(task)}


@router.get("", response_model=TaskListResponse)
async def list_all(
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """All tasks of the authenticated user, newest first."""
    tasks = await list_tasks(session, user_id)
    return {
        "message": "Tasks retrieved successfully",
        "count": len(tasks),
        "tasks": [TaskOut.model_validate(t) for t in tasks],
    }


@router.put("/{task_id}", response_model=TaskResponse)
async def update(
    task_id: str,
    body: Optional[TaskUpdate] = None,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """Update only the fields present in the request body."""
    changes = body.changes() if body is not None else {}
    task = await update_task(session, user_id, parse_task_id(task_id), changes)
    if task is None:
        raise NotFound()
    return {"message": "Task updated successfully", "task": TaskOut.model_validate(task)}


@router.delete("/{task_id}", response_model=TaskResponse)
async def delete(
    task_id: str,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    task = await delete_task(session, user_id, parse_task_id(task_id))
    if task is None:
        raise NotFound(
            "Task does not exist or you do not have permission to delete it"
        )
    return {"message": "Task deleted successfully", "task": TaskOut.model_validate(task)}
