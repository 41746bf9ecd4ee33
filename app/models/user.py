"""User Model - Office staff accounts (admins and employees)

Uses fastapi-users SQLAlchemyBaseUserTableUUID which provides:
- id (UUID)
- email (unique, indexed)
- hashed_password
- is_active (bool, default True)
- is_superuser (bool, default False)
- is_verified (bool, default False)

Clients of the agency are not users; they log in through their own credentials
stored on the Client model.
"""

from datetime import datetime
from enum import Enum as PyEnum

from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from sqlalchemy import DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class UserRole(str, PyEnum):
    """Staff roles"""

    ADMIN = "admin"  # Full access, manages users
    EMPLOYEE = "employee"  # Day-to-day data entry


class User(SQLAlchemyBaseUserTableUUID, Base):
    """Staff user model

    Custom fields:
        name: Display name
        phone: Phone number (optional)
        role: admin | employee
        language: Preferred notification language ("ar" | "en")
        created_at: When the account was created
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False, default=UserRole.EMPLOYEE, index=True)
    language: Mapped[str | None] = mapped_column(String(5), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
