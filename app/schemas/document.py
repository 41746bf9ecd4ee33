"""Document Schemas - Response models for document upload API"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class DocumentResponse(BaseModel):
    """Document response with all fields"""

    id: UUID
    file_id: UUID | None = None
    client_id: UUID | None = None
    file_name: str
    storage_key: str
    file_type: str
    content_type: str | None = None
    file_size: int
    uploaded_by: UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentListResponse(BaseModel):
    """List of documents with total count"""

    documents: list[DocumentResponse]
    total: int


class DocumentDownloadResponse(BaseModel):
    """Short-lived download link"""

    url: str
    expires_in: int
