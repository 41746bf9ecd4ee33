"""Client Schemas - Request/Response models for clients API"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class ClientCreate(BaseModel):
    """Client creation request

    login/password are optional; generated when omitted.
    """

    name: str = Field(..., max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=20)
    address: str | None = None
    cin: str | None = Field(None, max_length=50)
    login: str | None = Field(None, min_length=3, max_length=100)
    password: str | None = Field(None, min_length=6)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Client name is required")
        return value


class ClientUpdate(BaseModel):
    """Client update request (only provided fields change)"""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=20)
    address: str | None = None
    cin: str | None = Field(None, max_length=50)


class ClientResponse(BaseModel):
    """Client response (credentials never included)"""

    id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    cin: str | None = None
    login: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClientListResponse(BaseModel):
    """List of clients with total count"""

    clients: list[ClientResponse]
    total: int


class ClientStatsResponse(BaseModel):
    """Debt-recovery figures for one client"""

    total_files: int
    total_debt: float
    recovered_amount: float
    recovery_rate: float  # Percentage of files closed
