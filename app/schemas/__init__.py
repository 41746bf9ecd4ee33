"""Pydantic Schemas"""

from app.schemas.auth import ClientLoginRequest, ClientLoginResponse, TokenResponse
from app.schemas.case import (
    CaseCreate,
    CaseEventCreate,
    CaseEventResponse,
    CaseResponse,
    CaseTypeCreate,
    CaseTypeResponse,
    CaseUpdate,
)
from app.schemas.client import ClientCreate, ClientListResponse, ClientResponse, ClientStatsResponse, ClientUpdate
from app.schemas.debt_file import FileCreate, FileListResponse, FileResponse, FileUpdate, MoveToPaidRequest
from app.schemas.document import DocumentListResponse, DocumentResponse
from app.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseTypeResponse, FileExpensesResponse
from app.schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
    NotificationUnreadCountResponse,
)
from app.schemas.stats import DashboardResponse
from app.schemas.task import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate
from app.schemas.user import StaffUserCreate, StaffUserUpdate, UserRead

__all__ = [
    # Auth schemas
    "TokenResponse",
    "ClientLoginRequest",
    "ClientLoginResponse",
    # User schemas
    "UserRead",
    "StaffUserCreate",
    "StaffUserUpdate",
    # Client schemas
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ClientListResponse",
    "ClientStatsResponse",
    # File schemas
    "FileCreate",
    "FileUpdate",
    "FileResponse",
    "FileListResponse",
    "MoveToPaidRequest",
    # Expense schemas
    "ExpenseCreate",
    "ExpenseResponse",
    "ExpenseTypeResponse",
    "FileExpensesResponse",
    # Task schemas
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskListResponse",
    # Document schemas
    "DocumentResponse",
    "DocumentListResponse",
    # Case schemas
    "CaseTypeCreate",
    "CaseTypeResponse",
    "CaseCreate",
    "CaseUpdate",
    "CaseResponse",
    "CaseEventCreate",
    "CaseEventResponse",
    # Notification schemas
    "NotificationResponse",
    "NotificationListResponse",
    "NotificationUnreadCountResponse",
    # Stats schemas
    "DashboardResponse",
]
