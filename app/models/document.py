"""Document Model - Uploaded evidence (debt proofs, court rulings, scans)

Documents belong to a debt-recovery file and/or a client, and are stored in S3.
"""

import uuid

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, func

from app.database import Base


class Document(Base):
    """Document model

    Attributes:
        id: Unique document identifier (UUID)
        file_id: Debt-recovery file this document belongs to (optional)
        client_id: Client this document belongs to (optional)
        file_name: Original filename from upload
        storage_key: S3 object key
        file_type: Free-form category supplied by staff (default "document")
        content_type: MIME type reported by the upload
        file_size: File size in bytes
        uploaded_by: Staff user who uploaded it
    """

    __tablename__ = "documents"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    file_id = Column(GUID(), ForeignKey("files.id", ondelete="SET NULL"), nullable=True, index=True)
    client_id = Column(GUID(), ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)
    uploaded_by = Column(GUID(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    file_name = Column(String(255), nullable=False)
    storage_key = Column(String(1000), nullable=False, unique=True)
    file_type = Column(String(100), nullable=False, default="document")
    content_type = Column(String(100), nullable=True)
    file_size = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (Index("ix_documents_client_created", "client_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, file_name={self.file_name})>"
