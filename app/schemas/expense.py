"""Expense Schemas - Request/Response models for expenses API"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ExpenseTypeResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ExpenseCreate(BaseModel):
    """Expense booking request"""

    file_id: UUID
    expense_type_id: UUID
    amount: float = Field(..., gt=0)
    expense_date: date | None = None
    notes: str | None = None


class ExpenseResponse(BaseModel):
    id: UUID
    file_id: UUID
    expense_type_id: UUID
    expense_type_name: str | None = None
    amount: float
    expense_date: date | None = None
    notes: str | None = None
    created_by: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FileExpensesResponse(BaseModel):
    """Expenses of one file with their sum"""

    expenses: list[ExpenseResponse]
    total: float
