"""Legal Case Models - Case types, cases and scheduled case events

A case is a legal matter opened for a client (usually on the back of a debt-recovery
file). Case events are hearings, submissions, meetings and deadlines on the case
calendar; each carries its own reminder lead time and a reminder_sent flag maintained by
the daily reminder sweep.

reminder_sent lifecycle:
false → true when the reminder notification is emitted (event_date == today + reminder_days)
true → false once the event date has passed (reset pass of every sweep cycle)
"""

import uuid
from enum import Enum as PyEnum

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    func,
)

from app.database import Base


class CaseStatus(str, PyEnum):
    """Case status"""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"
    ON_HOLD = "on_hold"


class CasePriority(str, PyEnum):
    """Case priority"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class CaseEventType(str, PyEnum):
    """Kind of case calendar entry"""

    HEARING = "hearing"  # Court hearing
    SUBMISSION = "submission"  # Filing of documents
    MEETING = "meeting"
    DEADLINE = "deadline"
    OTHER = "other"


class CaseType(Base):
    """Case category (e.g. payment order, enforcement, appeal)"""

    __tablename__ = "case_types"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_by = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<CaseType(id={self.id}, name={self.name})>"


class Case(Base):
    """Legal case

    Attributes:
        client_id: Client the case is opened for
        file_id: Debt-recovery file behind the case
        case_type_id: Optional CaseType
        case_number: Court docket number (optional)
        court_*: Court name, address and coordinates
        status: open | in_progress | closed | on_hold
        priority: low | medium | high | urgent
    """

    __tablename__ = "cases"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    client_id = Column(GUID(), ForeignKey("clients.id"), nullable=False, index=True)
    file_id = Column(GUID(), ForeignKey("files.id"), nullable=False, index=True)
    case_type_id = Column(GUID(), ForeignKey("case_types.id"), nullable=True, index=True)
    created_by = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    case_number = Column(String(100), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    court_name = Column(String(255), nullable=True)
    court_address = Column(Text, nullable=True)
    court_lat = Column(Numeric(10, 7), nullable=True)
    court_lng = Column(Numeric(10, 7), nullable=True)
    status = Column(Enum(CaseStatus), default=CaseStatus.OPEN, nullable=False, index=True)
    priority = Column(Enum(CasePriority), default=CasePriority.MEDIUM, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Case(id={self.id}, title={self.title}, status={self.status})>"


class CaseEvent(Base):
    """Scheduled event on a case calendar

    Attributes:
        case_id: Case the event belongs to
        event_type: hearing | submission | meeting | deadline | other
        event_date: Calendar date of the event
        event_time: Time of day (optional)
        location, address, lat, lng: Where the event takes place
        reminder_days: Lead time in days for the reminder (default 7)
        reminder_sent: Set by the reminder sweep, reset once the event is in the past
        created_by: Staff user who scheduled the event (receives the reminder)
    """

    __tablename__ = "case_events"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    case_id = Column(GUID(), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    event_type = Column(Enum(CaseEventType), default=CaseEventType.HEARING, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(Date, nullable=False)
    event_time = Column(Time, nullable=True)
    location = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    lat = Column(Numeric(10, 7), nullable=True)
    lng = Column(Numeric(10, 7), nullable=True)

    reminder_days = Column(Integer, default=7, nullable=False)
    reminder_sent = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_case_events_case_date", "case_id", "event_date"),
        Index("ix_case_events_reminder", "reminder_sent", "event_date"),  # Sweep predicates
    )

    def __repr__(self) -> str:
        return f"<CaseEvent(id={self.id}, title={self.title}, event_date={self.event_date})>"
