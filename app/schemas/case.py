"""Case Schemas - Request/Response models for case types, cases and case events"""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.config import settings
from app.models.case import CaseEventType, CasePriority, CaseStatus


class CaseTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class CaseTypeResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    created_by: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CaseCreate(BaseModel):
    """Case creation request (client, file and title are required)"""

    client_id: UUID
    file_id: UUID
    case_type_id: UUID | None = None
    case_number: str | None = Field(None, max_length=100)
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    court_name: str | None = Field(None, max_length=255)
    court_address: str | None = None
    court_lat: float | None = Field(None, ge=-90, le=90)
    court_lng: float | None = Field(None, ge=-180, le=180)
    status: CaseStatus = CaseStatus.OPEN
    priority: CasePriority = CasePriority.MEDIUM


class CaseUpdate(BaseModel):
    """Partial case update"""

    case_type_id: UUID | None = None
    case_number: str | None = Field(None, max_length=100)
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    court_name: str | None = Field(None, max_length=255)
    court_address: str | None = None
    court_lat: float | None = Field(None, ge=-90, le=90)
    court_lng: float | None = Field(None, ge=-180, le=180)
    status: CaseStatus | None = None
    priority: CasePriority | None = None


class CaseResponse(BaseModel):
    id: UUID
    client_id: UUID
    file_id: UUID
    case_type_id: UUID | None = None
    case_type_name: str | None = None
    case_number: str | None = None
    title: str
    description: str | None = None
    court_name: str | None = None
    court_address: str | None = None
    court_lat: float | None = None
    court_lng: float | None = None
    status: CaseStatus
    priority: CasePriority
    created_by: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CaseListResponse(BaseModel):
    cases: list[CaseResponse]
    total: int


class CaseEventCreate(BaseModel):
    """Case event creation request (case, title and date are required)"""

    case_id: UUID
    event_type: CaseEventType = CaseEventType.HEARING
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    event_date: date
    event_time: time | None = None
    location: str | None = Field(None, max_length=255)
    address: str | None = None
    lat: float | None = Field(None, ge=-90, le=90)
    lng: float | None = Field(None, ge=-180, le=180)
    reminder_days: int = Field(7, ge=0, le=settings.MAX_REMINDER_DAYS)


class CaseEventResponse(BaseModel):
    id: UUID
    case_id: UUID
    event_type: CaseEventType
    title: str
    description: str | None = None
    event_date: date
    event_time: time | None = None
    location: str | None = None
    address: str | None = None
    lat: float | None = None
    lng: float | None = None
    reminder_days: int
    reminder_sent: bool
    created_by: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CaseEventListResponse(BaseModel):
    events: list[CaseEventResponse]
    total: int
