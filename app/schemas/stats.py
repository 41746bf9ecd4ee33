"""Statistics Schemas - Dashboard and report aggregates"""

from pydantic import BaseModel

from app.schemas.debt_file import FileResponse
from app.schemas.task import TaskResponse


class FileStats(BaseModel):
    total_files: int = 0
    total_debt: float = 0.0
    new_files: int = 0
    in_progress_files: int = 0
    paid_files: int = 0
    partially_paid_files: int = 0
    closed_files: int = 0


class ClientCounts(BaseModel):
    total_clients: int = 0
    active_clients: int = 0  # Clients with at least one file


class TaskStats(BaseModel):
    total_tasks: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0


class FinancialStats(BaseModel):
    total_recovered: float = 0.0
    total_expenses: float = 0.0
    total_net_commission: float = 0.0


class DashboardResponse(BaseModel):
    """Admin/employee dashboard"""

    files: FileStats
    clients: ClientCounts
    tasks: TaskStats
    financial: FinancialStats
    recent_files: list[FileResponse]
    upcoming_tasks: list[TaskResponse]


class ClientStatisticsRow(BaseModel):
    client_id: str
    client_name: str
    file_count: int
    total_debt: float
    recovered_amount: float
    total_expenses: float
    client_rights: float
    recovery_rate: float
    net_commission: float
    due_balance: float


class MonthlyStatisticsRow(BaseModel):
    year: int
    month: int
    files_count: int
    total_debt: float
    recovered_amount: float
    expenses: float
    net_commission: float
