"""Task Schemas - Request/Response models for tasks API"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.config import settings
from app.models.task import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """Task creation request (title and assignee are required)"""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    file_id: UUID | None = None
    assigned_to: UUID
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    reminder_days: int | None = Field(3, ge=0, le=settings.MAX_REMINDER_DAYS)


class TaskUpdate(BaseModel):
    """Task update request (only provided fields change)"""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    file_id: UUID | None = None
    assigned_to: UUID | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    reminder_days: int | None = Field(None, ge=0, le=settings.MAX_REMINDER_DAYS)


class TaskResponse(BaseModel):
    id: UUID
    title: str
    description: str | None = None
    file_id: UUID | None = None
    assigned_to: UUID | None = None
    priority: TaskPriority
    status: TaskStatus
    due_date: date | None = None
    reminder_days: int | None = None
    created_by: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskListResponse(BaseModel):
    """List of tasks with total count"""

    tasks: list[TaskResponse]
    total: int
