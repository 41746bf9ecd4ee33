"""Documents API - Upload, list, download, and delete documents"""

import logging
import os
import uuid
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.clients import get_client_or_404
from app.api.v1.files import get_file_or_404
from app.config import settings
from app.database import get_db
from app.models.document import Document
from app.models.user import User
from app.schemas.document import DocumentDownloadResponse, DocumentListResponse, DocumentResponse
from app.services.storage_service import StorageService, get_storage_service
from app.users import staff_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png"}
DOWNLOAD_URL_EXPIRATION = 3600


async def _get_document_or_404(db: AsyncSession, document_id: UUID) -> Document:
    result = await db.execute(select(Document).where(Document.id == document_id))
    document = result.scalar_one_or_none()
    if not document:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return document


@router.post("/upload", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    document: UploadFile = File(...),
    file_id: UUID | None = Form(None),
    client_id: UUID | None = Form(None),
    file_type: str = Form("document"),
    current_user: User = Depends(staff_user),
    db: AsyncSession = Depends(get_db),
    storage_service: StorageService = Depends(get_storage_service),
):
    """Upload a document to S3 and create its database record

    Args:
        document: Uploaded file (PDF, Word, JPEG, PNG)
        file_id: Debt-recovery file the document belongs to (optional)
        client_id: Client the document belongs to (optional)
        file_type: Free-form category (default "document")

    Raises:
        400: Invalid file type or file too large
        404: File or client not found
        500: Storage upload failed
    """
    if file_id:
        await get_file_or_404(db, file_id)
    if client_id:
        await get_client_or_404(db, client_id)

    filename = document.filename or "unnamed"
    extension = os.path.splitext(filename)[1].lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type: {extension or filename}. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
        )

    file_content = await document.read()
    file_size = len(file_content)
    if file_size > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size: {settings.MAX_UPLOAD_SIZE_MB}MB",
        )

    content_type = document.content_type or "application/octet-stream"
    document_id = uuid.uuid4()

    # Upload first: a failed upload leaves no database row
    try:
        storage_key = storage_service.upload_document(
            file_content=file_content,
            document_id=document_id,
            filename=filename,
            content_type=content_type,
            client_id=client_id,
            file_id=file_id,
        )
    except Exception as e:
        logger.error(f"Upload of document {document_id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Upload failed") from e

    record = Document(
        id=document_id,
        file_id=file_id,
        client_id=client_id,
        uploaded_by=current_user.id,
        file_name=filename,
        storage_key=storage_key,
        file_type=file_type,
        content_type=content_type,
        file_size=file_size,
    )
    db.add(record)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        # Don't leave an orphaned object behind
        storage_service.delete_object(storage_key)
        raise
    await db.refresh(record)

    return record


@router.get("/file/{file_id}", response_model=DocumentListResponse)
async def list_file_documents(
    file_id: UUID,
    current_user: User = Depends(staff_user),
    db: AsyncSession = Depends(get_db),
):
    """List documents of a debt-recovery file, newest first"""
    await get_file_or_404(db, file_id)
    result = await db.execute(
        select(Document).where(Document.file_id == file_id).order_by(Document.created_at.desc())
    )
    documents = result.scalars().all()
    return DocumentListResponse(documents=list(documents), total=len(documents))


@router.get("/client/{client_id}", response_model=DocumentListResponse)
async def list_client_documents(
    client_id: UUID,
    current_user: User = Depends(staff_user),
    db: AsyncSession = Depends(get_db),
):
    """List documents of a client, newest first"""
    await get_client_or_404(db, client_id)
    result = await db.execute(
        select(Document).where(Document.client_id == client_id).order_by(Document.created_at.desc())
    )
    documents = result.scalars().all()
    return DocumentListResponse(documents=list(documents), total=len(documents))


@router.get("/{document_id}/download", response_model=DocumentDownloadResponse)
async def download_document(
    document_id: UUID,
    current_user: User = Depends(staff_user),
    db: AsyncSession = Depends(get_db),
    storage_service: StorageService = Depends(get_storage_service),
):
    """Short-lived pre-signed download URL"""
    document = await _get_document_or_404(db, document_id)
    url = storage_service.generate_presigned_url(document.storage_key, expiration_seconds=DOWNLOAD_URL_EXPIRATION)
    return DocumentDownloadResponse(url=url, expires_in=DOWNLOAD_URL_EXPIRATION)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: UUID,
    current_user: User = Depends(staff_user),
    db: AsyncSession = Depends(get_db),
    storage_service: StorageService = Depends(get_storage_service),
):
    """Delete document

    Deletes:
    - Document from S3
    - Document record from database

    Raises:
        404: Document not found
    """
    document = await _get_document_or_404(db, document_id)

    # Delete from S3
    try:
        storage_service.delete_object(document.storage_key)
    except Exception as e:
        # Log error but continue with database deletion
        logger.warning(f"Failed to delete S3 object {document.storage_key}: {e}")

    await db.delete(document)
    await db.commit()

    return None
