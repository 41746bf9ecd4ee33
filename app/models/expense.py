"""Expense Models - Costs incurred while recovering a file (bailiff fees, filings, ...)"""

import uuid

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, Text, func

from app.database import Base

# Reference list seeded by the initial migration
DEFAULT_EXPENSE_TYPES = [
    "أجرة محامي",
    "رفع اعتراض",
    "اتعاب تقاضي",
    "تنبيه",
    "احتجاج بالدفع",
    "عقلة تنفيذية",
    "شاحنة وعملة",
    "قوة عاملة",
    "ادراج عربة بالتفتيش",
    "محضر تنفيذ جزئي",
    "ايقاف تنفيذ",
    "مواصلة تنفيذ",
    "رفع اعتراض سيارة",
    "محاولة التبليغ عن عجز",
    "احتجاج",
    "محاولة",
    "انذار بالدفع",
    "اعلام حكم مدني",
    "محضر ترسيم اعتراض تحفظي",
    "كف تفتيش",
    "اتصال بمركز",
    "محضر بحث واسترشاد",
    "ايداع بمركز",
    "تعذر تنفيذ",
    "محاولة تنفيذ",
    "تنابر",
    "تنفيذ بالاداء",
    "اعلام بتوكيل",
    "استقصاء",
    "أمر بدفع",
    "اذون",
    "تنابر إحالة",
    "تنفيذية",
    "استئناف",
    "كشف ملكية",
    "كشف اسطول",
    "بريدية",
    "اعتراض",
    "استدعائات",
    "أجرة عدل تنفيذ",
]


class ExpenseType(Base):
    """Expense category"""

    __tablename__ = "expense_types"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<ExpenseType(id={self.id}, name={self.name})>"


class FileExpense(Base):
    """One expense booked against a debt-recovery file"""

    __tablename__ = "file_expenses"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    file_id = Column(GUID(), ForeignKey("files.id", ondelete="CASCADE"), nullable=False, index=True)
    expense_type_id = Column(GUID(), ForeignKey("expense_types.id"), nullable=False)
    created_by = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    amount = Column(Numeric(15, 2), nullable=False)
    expense_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<FileExpense(id={self.id}, file_id={self.file_id}, amount={self.amount})>"
