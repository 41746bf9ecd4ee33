"""Client Model - Customers of the agency whose debts are being recovered

A client owns debt-recovery files, legal cases and documents. Clients can log in to
a read-only portal with their own login/password (separate from staff users).
"""

import uuid

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import Column, DateTime, String, Text, func

from app.database import Base


class Client(Base):
    """Client model

    Attributes:
        id: Unique client identifier (UUID)
        name: Client name (person or company)
        email, phone, address: Contact details
        cin: National identity card number
        login: Portal login (unique, generated when not supplied)
        hashed_password: Portal password hash
    """

    __tablename__ = "clients"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    cin = Column(String(50), nullable=True)

    # Portal credentials
    login = Column(String(100), nullable=True, unique=True)
    hashed_password = Column(String(1024), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name={self.name})>"
