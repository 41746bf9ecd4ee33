"""Debt-Recovery File Models

A file ("dossier") tracks one debt owed by a debtor to a client. When the debt is
recovered the file is moved to paid: a PaidFile row keeps the settlement figures and
the file status becomes closed.

Status Flow:
new → in_progress → partially_paid / paid → closed
"""

import uuid
from enum import Enum as PyEnum

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Index, Numeric, String, Text, func

from app.database import Base


class FileStatus(str, PyEnum):
    """Debt-recovery file status"""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    PAID = "paid"
    PARTIALLY_PAID = "partially_paid"
    CLOSED = "closed"


class DebtFile(Base):
    """Debt-recovery file

    Attributes:
        deposit_date: Date the client deposited the file with the agency
        client_id: Client the debt is owed to
        debtor: Debtor name
        debt_proof: Description of the proof of debt (cheque, invoice, ...)
        total_amount: Total amount owed
        commission: Agency commission
        status: FileStatus
        created_by: Staff user who registered the file
    """

    __tablename__ = "files"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    client_id = Column(GUID(), ForeignKey("clients.id"), nullable=False, index=True)
    created_by = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    deposit_date = Column(Date, nullable=False)
    debtor = Column(String(255), nullable=False)
    debt_proof = Column(Text, nullable=True)
    total_amount = Column(Numeric(15, 2), nullable=False)
    commission = Column(Numeric(15, 2), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(Enum(FileStatus), default=FileStatus.NEW, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (Index("ix_files_client_created", "client_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<DebtFile(id={self.id}, debtor={self.debtor}, status={self.status})>"


class PaidFile(Base):
    """Settlement figures of a file that was moved to paid (one per file)"""

    __tablename__ = "paid_files"

    file_id = Column(GUID(), ForeignKey("files.id", ondelete="CASCADE"), primary_key=True)

    last_action = Column(String(255), nullable=True)
    last_action_date = Column(Date, nullable=True)
    recovered_amount = Column(Numeric(15, 2), nullable=True)
    client_rights = Column(Numeric(15, 2), nullable=True)
    notes = Column(Text, nullable=True)
    client_balance = Column(Numeric(15, 2), nullable=True)
    balance_date = Column(Date, nullable=True)
    expenses = Column(Numeric(15, 2), nullable=True)
    reference = Column(String(255), nullable=True)
    net_commission = Column(Numeric(15, 2), nullable=True)
    due_balance = Column(Numeric(15, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<PaidFile(file_id={self.file_id}, recovered_amount={self.recovered_amount})>"
