"""Pydantic schemas for file store endpoints."""

from typing import Dict, List, Optional
from pydantic import BaseModel

from filestore.models import StoredFile


class UploadFileResponse(BaseModel):
    """Response model for file upload."""
    name: str
    size: int
    file_type: str
    tags: List[str]


class FileMetadataResponse(BaseModel):
    """Response model for file metadata."""
    name: str
    size: int
    upload_timestamp: int
    last_modified: int
    file_type: str
    is_encrypted: bool
    version_history: List[str]
    tags: List[str]

    @classmethod
    def from_stored_file(cls, stored: StoredFile) -> "FileMetadataResponse":
        metadata = stored.metadata
        return cls(
            name=metadata.name,
            size=metadata.size,
            upload_timestamp=metadata.upload_timestamp,
            last_modified=metadata.last_modified,
            file_type=metadata.file_type,
            is_encrypted=metadata.is_encrypted,
            version_history=list(metadata.version_history),
            tags=list(metadata.tags),
        )


class ListFilesResponse(BaseModel):
    """Response model for tag search."""
    files: List[FileMetadataResponse]


class UpdateMetadataRequest(BaseModel):
    """Request model for metadata updates; null tags keeps the current ones."""
    tags: Optional[List[str]] = None


class OperationResponse(BaseModel):
    """Response model for operations that only report success."""
    success: bool


class CreateVersionResponse(BaseModel):
    """Response model for version creation."""
    name: str
    version_id: str
    version_count: int


class StorageAnalyticsResponse(BaseModel):
    """Response model for storage analytics."""
    storage_usage: int
    max_storage_size: int
    file_count: int


class FileTypeDistributionResponse(BaseModel):
    """Response model for file type distribution."""
    distribution: Dict[str, int]


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str
