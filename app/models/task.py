"""Task Model - Work items assigned to staff, optionally tied to a debt-recovery file

Tasks inside their reminder window (due_date - reminder_days .. due_date) are picked up
by the daily reminder sweep while pending or in progress.
"""

import uuid
from enum import Enum as PyEnum

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Index, Integer, String, Text, func

from app.database import Base


class TaskPriority(str, PyEnum):
    """Task priority"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, PyEnum):
    """Task status"""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that still receive reminders
OPEN_TASK_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)


class Task(Base):
    """Task model

    Attributes:
        title, description: What needs to be done
        file_id: Optional debt-recovery file the task relates to
        assigned_to: Staff user responsible for the task (receives reminders)
        priority: low | medium | high
        status: pending | in_progress | completed | cancelled
        due_date: Deadline (date granularity)
        reminder_days: Lead time in days before due_date when reminders start (default 3)
        created_by: Staff user who created the task
    """

    __tablename__ = "tasks"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    file_id = Column(GUID(), ForeignKey("files.id", ondelete="SET NULL"), nullable=True, index=True)
    assigned_to = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_by = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(Enum(TaskPriority), default=TaskPriority.MEDIUM, nullable=False)
    status = Column(Enum(TaskStatus), default=TaskStatus.PENDING, nullable=False, index=True)
    due_date = Column(Date, nullable=True)
    reminder_days = Column(Integer, default=3, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (Index("ix_tasks_status_due", "status", "due_date"),)

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title}, status={self.status})>"
