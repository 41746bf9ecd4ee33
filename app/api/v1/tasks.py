"""Tasks API - Staff to-dos, optionally attached to a file

Endpoints:
- GET /tasks - List tasks (filter by status and assignee)
- GET /tasks/my-tasks - Tasks assigned to the caller
- POST /tasks - Create a task and notify the assignee
- PUT /tasks/{task_id} - Update a task
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import DebtFile, Task, TaskPriority, TaskStatus, User
from app.models.notification import NotificationType
from app.schemas.task import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate
from app.services.notification_service import create_notification, render_task_assigned
from app.users import staff_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])

# Enum columns store member names, so ordering needs explicit ranks
PRIORITY_RANK = case(
    (Task.priority == TaskPriority.HIGH, 0),
    (Task.priority == TaskPriority.MEDIUM, 1),
    else_=2,
)
STATUS_RANK = case(
    (Task.status == TaskStatus.PENDING, 0),
    (Task.status == TaskStatus.IN_PROGRESS, 1),
    else_=2,
)
DUE_DATE_NULLS_LAST = (Task.due_date.is_(None), Task.due_date.asc())


async def _ensure_user_exists(db: AsyncSession, user_id: UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assigned user not found")
    return user


async def _ensure_file_exists(db: AsyncSession, file_id: UUID) -> None:
    result = await db.execute(select(DebtFile.id).where(DebtFile.id == file_id))
    if not result.first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    status_filter: Annotated[TaskStatus | None, Query(alias="status")] = None,
    assigned_to: UUID | None = None,
) -> TaskListResponse:
    """List tasks by due date (undated last), then priority (high first)"""
    query = select(Task)
    if status_filter:
        query = query.where(Task.status == status_filter)
    if assigned_to:
        query = query.where(Task.assigned_to == assigned_to)

    result = await db.execute(query.order_by(*DUE_DATE_NULLS_LAST, PRIORITY_RANK))
    tasks = result.scalars().all()
    return TaskListResponse(tasks=[TaskResponse.model_validate(t) for t in tasks], total=len(tasks))


@router.get("/my-tasks", response_model=TaskListResponse)
async def my_tasks(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskListResponse:
    """Tasks assigned to the caller: pending, in progress, then the rest, each by due date"""
    result = await db.execute(
        select(Task).where(Task.assigned_to == current_user.id).order_by(STATUS_RANK, *DUE_DATE_NULLS_LAST)
    )
    tasks = result.scalars().all()
    return TaskListResponse(tasks=[TaskResponse.model_validate(t) for t in tasks], total=len(tasks))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a task and notify the assignee (link /tasks/{id})

    Raises:
        404: Assignee or file not found
    """
    assignee = await _ensure_user_exists(db, data.assigned_to)
    if data.file_id:
        await _ensure_file_exists(db, data.file_id)

    task = Task(**data.model_dump(), status=TaskStatus.PENDING, created_by=current_user.id)
    db.add(task)
    await db.commit()
    await db.refresh(task)
    task_id = task.id
    logger.info(f"Task {task.id} created and assigned to {task.assigned_to}")

    # Best-effort: the task exists even if the notification fails
    try:
        title, message = render_task_assigned(task_title=task.title, language=assignee.language)
        await create_notification(
            db,
            user_id=assignee.id,
            type=NotificationType.TASK_ASSIGNED,
            title=title,
            message=message,
            link=f"/tasks/{task.id}",
        )
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error(f"Failed to notify user {data.assigned_to} about task {task_id}", exc_info=True)
        await db.refresh(task)

    return task


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a task. Only provided fields change."""
    result = await db.execute(select(Task).where(Task.id == task_id))
    task = result.scalar_one_or_none()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("assigned_to"):
        await _ensure_user_exists(db, update_data["assigned_to"])
    if update_data.get("file_id"):
        await _ensure_file_exists(db, update_data["file_id"])

    for field, value in update_data.items():
        setattr(task, field, value)

    await db.commit()
    await db.refresh(task)
    return task
