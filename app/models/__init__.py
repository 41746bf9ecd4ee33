"""Database Models

All models must be imported here for Alembic auto-detect to work.
"""

from app.models.case import Case, CaseEvent, CaseEventType, CasePriority, CaseStatus, CaseType
from app.models.client import Client
from app.models.debt_file import DebtFile, FileStatus, PaidFile
from app.models.document import Document
from app.models.expense import ExpenseType, FileExpense
from app.models.notification import Notification, NotificationType
from app.models.task import Task, TaskPriority, TaskStatus
from app.models.user import User, UserRole

__all__ = [
    "User",
    "Client",
    "DebtFile",
    "PaidFile",
    "ExpenseType",
    "FileExpense",
    "Task",
    "Document",
    "CaseType",
    "Case",
    "CaseEvent",
    "Notification",
    # Enums
    "UserRole",
    "FileStatus",
    "TaskPriority",
    "TaskStatus",
    "CaseStatus",
    "CasePriority",
    "CaseEventType",
    "NotificationType",
]
