"""
User Schemas
Pydantic models for staff user request/response validation
"""

import uuid
from datetime import datetime

from fastapi_users import schemas
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.user import UserRole


class UserRead(schemas.BaseUser[uuid.UUID]):
    """Schema for user response (read operations)"""

    name: str
    phone: str | None = None
    role: UserRole
    language: str | None = None
    created_at: datetime | None = None


class StaffUserCreate(BaseModel):
    """Admin request to create a staff account (password is generated)"""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    role: UserRole = UserRole.EMPLOYEE
    language: str | None = Field(None, max_length=5)


class StaffUserUpdate(BaseModel):
    """Admin request to update a staff account (only provided fields change)"""

    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=20)
    role: UserRole | None = None
    language: str | None = Field(None, max_length=5)
    is_active: bool | None = None


class StaffUserCreatedResponse(UserRead):
    """Created user with the generated password (returned once)"""

    password: str


class UserListResponse(BaseModel):
    """List of staff users"""

    users: list[UserRead]
    total: int

    model_config = ConfigDict(from_attributes=True)
