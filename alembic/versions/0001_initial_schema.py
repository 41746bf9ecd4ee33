"""Initial schema: staff users, clients, files, expenses, tasks, documents, cases, notifications

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-10-20 09:00:00.000000

"""

import uuid
from typing import Sequence, Union

import sqlalchemy as sa
from fastapi_users_db_sqlalchemy.generics import GUID

from alembic import op
from app.models.expense import DEFAULT_EXPENSE_TYPES

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum columns store member names
user_role = sa.Enum("ADMIN", "EMPLOYEE", name="userrole")
file_status = sa.Enum("NEW", "IN_PROGRESS", "PAID", "PARTIALLY_PAID", "CLOSED", name="filestatus")
task_priority = sa.Enum("LOW", "MEDIUM", "HIGH", name="taskpriority")
task_status = sa.Enum("PENDING", "IN_PROGRESS", "COMPLETED", "CANCELLED", name="taskstatus")
case_status = sa.Enum("OPEN", "IN_PROGRESS", "CLOSED", "ON_HOLD", name="casestatus")
case_priority = sa.Enum("LOW", "MEDIUM", "HIGH", "URGENT", name="casepriority")
case_event_type = sa.Enum("HEARING", "SUBMISSION", "MEETING", "DEADLINE", "OTHER", name="caseeventtype")


def _timestamps(with_updated_at: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)]
    if with_updated_at:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        )
    return columns


def upgrade() -> None:
    """Upgrade schema - Create all tables and seed expense types"""
    op.create_table(
        "users",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=1024), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_superuser", sa.Boolean(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("language", sa.String(length=5), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "clients",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("cin", sa.String(length=50), nullable=True),
        sa.Column("login", sa.String(length=100), nullable=True),
        sa.Column("hashed_password", sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("login"),
    )
    op.create_index("ix_clients_name", "clients", ["name"])

    op.create_table(
        "files",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("client_id", GUID(), nullable=False),
        sa.Column("created_by", GUID(), nullable=True),
        sa.Column("deposit_date", sa.Date(), nullable=False),
        sa.Column("debtor", sa.String(length=255), nullable=False),
        sa.Column("debt_proof", sa.Text(), nullable=True),
        sa.Column("total_amount", sa.Numeric(15, 2), nullable=False),
        sa.Column("commission", sa.Numeric(15, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", file_status, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"]),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_files_client_id", "files", ["client_id"])
    op.create_index("ix_files_status", "files", ["status"])
    op.create_index("ix_files_client_created", "files", ["client_id", "created_at"])

    op.create_table(
        "paid_files",
        sa.Column("file_id", GUID(), nullable=False),
        sa.Column("last_action", sa.String(length=255), nullable=True),
        sa.Column("last_action_date", sa.Date(), nullable=True),
        sa.Column("recovered_amount", sa.Numeric(15, 2), nullable=True),
        sa.Column("client_rights", sa.Numeric(15, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("client_balance", sa.Numeric(15, 2), nullable=True),
        sa.Column("balance_date", sa.Date(), nullable=True),
        sa.Column("expenses", sa.Numeric(15, 2), nullable=True),
        sa.Column("reference", sa.String(length=255), nullable=True),
        sa.Column("net_commission", sa.Numeric(15, 2), nullable=True),
        sa.Column("due_balance", sa.Numeric(15, 2), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint("file_id"),
        sa.ForeignKeyConstraint(["file_id"], ["files.id"], ondelete="CASCADE"),
    )

    expense_types = op.create_table(
        "expense_types",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "file_expenses",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("file_id", GUID(), nullable=False),
        sa.Column("expense_type_id", GUID(), nullable=False),
        sa.Column("created_by", GUID(), nullable=True),
        sa.Column("amount", sa.Numeric(15, 2), nullable=False),
        sa.Column("expense_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["file_id"], ["files.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["expense_type_id"], ["expense_types.id"]),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_file_expenses_file_id", "file_expenses", ["file_id"])

    op.create_table(
        "tasks",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("file_id", GUID(), nullable=True),
        sa.Column("assigned_to", GUID(), nullable=True),
        sa.Column("created_by", GUID(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", task_priority, nullable=False),
        sa.Column("status", task_status, nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("reminder_days", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["file_id"], ["files.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_tasks_file_id", "tasks", ["file_id"])
    op.create_index("ix_tasks_assigned_to", "tasks", ["assigned_to"])
    op.create_index("ix_tasks_status", "tasks", ["status"])
    op.create_index("ix_tasks_status_due", "tasks", ["status", "due_date"])

    op.create_table(
        "documents",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("file_id", GUID(), nullable=True),
        sa.Column("client_id", GUID(), nullable=True),
        sa.Column("uploaded_by", GUID(), nullable=True),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("storage_key", sa.String(length=1000), nullable=False),
        sa.Column("file_type", sa.String(length=100), nullable=False),
        sa.Column("content_type", sa.String(length=100), nullable=True),
        sa.Column("file_size", sa.Integer(), nullable=False),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("storage_key"),
        sa.ForeignKeyConstraint(["file_id"], ["files.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_documents_file_id", "documents", ["file_id"])
    op.create_index("ix_documents_client_id", "documents", ["client_id"])
    op.create_index("ix_documents_client_created", "documents", ["client_id", "created_at"])

    op.create_table(
        "case_types",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", GUID(), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )

    op.create_table(
        "cases",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("client_id", GUID(), nullable=False),
        sa.Column("file_id", GUID(), nullable=False),
        sa.Column("case_type_id", GUID(), nullable=True),
        sa.Column("created_by", GUID(), nullable=True),
        sa.Column("case_number", sa.String(length=100), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("court_name", sa.String(length=255), nullable=True),
        sa.Column("court_address", sa.Text(), nullable=True),
        sa.Column("court_lat", sa.Numeric(10, 7), nullable=True),
        sa.Column("court_lng", sa.Numeric(10, 7), nullable=True),
        sa.Column("status", case_status, nullable=False),
        sa.Column("priority", case_priority, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"]),
        sa.ForeignKeyConstraint(["file_id"], ["files.id"]),
        sa.ForeignKeyConstraint(["case_type_id"], ["case_types.id"]),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_cases_client_id", "cases", ["client_id"])
    op.create_index("ix_cases_file_id", "cases", ["file_id"])
    op.create_index("ix_cases_case_type_id", "cases", ["case_type_id"])
    op.create_index("ix_cases_status", "cases", ["status"])

    op.create_table(
        "case_events",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("case_id", GUID(), nullable=False),
        sa.Column("created_by", GUID(), nullable=True),
        sa.Column("event_type", case_event_type, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("event_time", sa.Time(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("lat", sa.Numeric(10, 7), nullable=True),
        sa.Column("lng", sa.Numeric(10, 7), nullable=True),
        sa.Column("reminder_days", sa.Integer(), server_default="7", nullable=False),
        sa.Column("reminder_sent", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["case_id"], ["cases.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_case_events_case_id", "case_events", ["case_id"])
    op.create_index("ix_case_events_case_date", "case_events", ["case_id", "event_date"])
    op.create_index("ix_case_events_reminder", "case_events", ["reminder_sent", "event_date"])

    op.create_table(
        "notifications",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("user_id", GUID(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("link", sa.String(length=500), nullable=True),
        sa.Column("read", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_type", "notifications", ["type"])
    op.create_index("ix_notifications_read", "notifications", ["read"])
    op.create_index("ix_notifications_user_read", "notifications", ["user_id", "read"])
    op.create_index("ix_notifications_user_created", "notifications", ["user_id", "created_at"])

    op.bulk_insert(expense_types, [{"id": uuid.uuid4(), "name": name} for name in DEFAULT_EXPENSE_TYPES])


def downgrade() -> None:
    """Downgrade schema - Drop all tables and enum types"""
    for table in (
        "notifications",
        "case_events",
        "cases",
        "case_types",
        "documents",
        "tasks",
        "file_expenses",
        "expense_types",
        "paid_files",
        "files",
        "clients",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum in (case_event_type, case_priority, case_status, task_status, task_priority, file_status, user_role):
        enum.drop(bind, checkfirst=True)
