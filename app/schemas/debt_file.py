"""Debt-Recovery File Schemas - Request/Response models for files API"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.debt_file import FileStatus


class FileCreate(BaseModel):
    """File creation request"""

    deposit_date: date
    client_id: UUID
    debtor: str = Field(..., min_length=1, max_length=255)
    debt_proof: str | None = None
    total_amount: float = Field(..., gt=0)
    commission: float | None = Field(None, ge=0)
    notes: str | None = None


class FileUpdate(BaseModel):
    """File update request (only provided fields change)"""

    deposit_date: date | None = None
    debtor: str | None = Field(None, min_length=1, max_length=255)
    debt_proof: str | None = None
    total_amount: float | None = Field(None, gt=0)
    commission: float | None = Field(None, ge=0)
    notes: str | None = None
    status: FileStatus | None = None


class FileResponse(BaseModel):
    """File response with recovery figures from the paid record"""

    id: UUID
    client_id: UUID
    deposit_date: date
    debtor: str
    debt_proof: str | None = None
    total_amount: float
    commission: float | None = None
    notes: str | None = None
    status: FileStatus
    created_by: UUID | None = None
    created_at: datetime
    recovered_amount: float | None = None
    recovery_percentage: float = 0.0
    total_expenses: float | None = None

    model_config = ConfigDict(from_attributes=True)


class FileListResponse(BaseModel):
    """List of files with total count"""

    files: list[FileResponse]
    total: int


class MoveToPaidRequest(BaseModel):
    """Settlement figures recorded when a file is moved to paid"""

    last_action: str | None = Field(None, max_length=255)
    last_action_date: date | None = None
    recovered_amount: float | None = Field(None, ge=0)
    client_rights: float | None = None
    notes: str | None = None
    client_balance: float | None = None
    balance_date: date | None = None
    expenses: float | None = Field(None, ge=0)
    reference: str | None = Field(None, max_length=255)
    net_commission: float | None = None
    due_balance: float | None = None


class PaidFileResponse(MoveToPaidRequest):
    """Paid record of a file"""

    file_id: UUID

    model_config = ConfigDict(from_attributes=True)
