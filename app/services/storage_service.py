"""Storage Service - Document storage on AWS S3

S3 Structure:
- Client documents: clients/{client_id}/documents/{document_id}/{filename}
- File-only documents: files/{file_id}/documents/{document_id}/{filename}
- Unattached documents: documents/{document_id}/{filename}
"""

import logging
from uuid import UUID

import boto3

from app.config import settings

logger = logging.getLogger(__name__)


class StorageService:
    """Service for handling S3 file operations"""

    def __init__(self):
        """Initialize S3 client

        Uses explicit credentials if provided, otherwise falls back to
        boto3 default credential chain (~/.aws/credentials or IAM role).
        """
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            self.s3_client = boto3.client(
                "s3",
                region_name=settings.AWS_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            )
        else:
            self.s3_client = boto3.client("s3", region_name=settings.AWS_REGION)
        self.bucket_name = settings.S3_DOCUMENTS_BUCKET

    @staticmethod
    def build_key(document_id: UUID, filename: str, client_id: UUID | None = None, file_id: UUID | None = None) -> str:
        """Build the S3 object key for a document"""
        if client_id:
            return f"clients/{client_id}/documents/{document_id}/{filename}"
        if file_id:
            return f"files/{file_id}/documents/{document_id}/{filename}"
        return f"documents/{document_id}/{filename}"

    def upload_document(
        self,
        file_content: bytes,
        document_id: UUID,
        filename: str,
        content_type: str,
        client_id: UUID | None = None,
        file_id: UUID | None = None,
    ) -> str:
        """Upload document to S3

        Returns:
            S3 object key
        """
        s3_key = self.build_key(document_id, filename, client_id=client_id, file_id=file_id)

        self.s3_client.put_object(
            Bucket=self.bucket_name,
            Key=s3_key,
            Body=file_content,
            ContentType=content_type,
        )
        logger.info(f"Uploaded document {document_id} to s3://{self.bucket_name}/{s3_key}")

        return s3_key

    def generate_presigned_url(self, s3_key: str, expiration_seconds: int = 3600) -> str:
        """Generate pre-signed URL for downloading file"""
        return self.s3_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket_name, "Key": s3_key},
            ExpiresIn=expiration_seconds,
        )

    def delete_object(self, s3_key: str) -> None:
        """Delete object from S3"""
        self.s3_client.delete_object(Bucket=self.bucket_name, Key=s3_key)
        logger.info(f"Deleted s3://{self.bucket_name}/{s3_key}")


def get_storage_service() -> StorageService:
    """Dependency to get storage service (overridden in tests)"""
    return StorageService()
