"""File operation API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from common.logging_config import get_logger
from filestore.engine import StorageEngine
from server.schemas import (
    CreateVersionResponse,
    FileMetadataResponse,
    ListFilesResponse,
    OperationResponse,
    UpdateMetadataRequest,
    UploadFileResponse,
)
from server.service_locator import require_storage_engine
from server.utils import parse_tags

logger = get_logger(__name__)

router = APIRouter(prefix="/files", tags=["Files"])


@router.post("", response_model=UploadFileResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile = File(...),
    file_type: str = Form(""),
    tags: str = Form(""),
    name: Optional[str] = Form(None),
    engine: StorageEngine = Depends(require_storage_engine)
):
    """
    Upload a file, replacing any file stored under the same name.

    Parameters:
        - file: File to upload (multipart/form-data)
        - file_type: Free-form type label
        - tags: Comma-separated list of tags (e.g., "tag1,tag2,tag3"), may be empty
        - name: Name to store the file under; defaults to the uploaded filename

    Raises:
        - 413: File exceeds the per-file limit or the total capacity
    """
    file_name = name or file.filename
    content = await file.read()
    tag_list = parse_tags(tags)

    engine.upload(file_name, content, file_type, tag_list)

    return UploadFileResponse(
        name=file_name,
        size=len(content),
        file_type=file_type,
        tags=tag_list,
    )


@router.get("", response_model=ListFilesResponse)
async def search_files(
    tags: Optional[str] = Query(None, description="Comma-separated tags for AND query; empty lists all files"),
    engine: StorageEngine = Depends(require_storage_engine)
):
    """
    Query files by tag intersection (AND logic).
    """
    files = engine.search_by_tags(parse_tags(tags))
    return ListFilesResponse(files=[FileMetadataResponse.from_stored_file(f) for f in files])


@router.get("/{name}", response_model=FileMetadataResponse)
async def get_file_metadata(
    name: str,
    engine: StorageEngine = Depends(require_storage_engine)
):
    """
    Return the metadata of a stored file.

    Raises:
        - 404: File not found
    """
    return FileMetadataResponse.from_stored_file(engine.download(name))


@router.get("/{name}/download")
async def download_file(
    name: str,
    engine: StorageEngine = Depends(require_storage_engine)
):
    """
    Download the current content of a file.

    Raises:
        - 404: File not found
    """
    stored = engine.download(name)
    return Response(
        content=stored.content,
        media_type="application/octet-stream",
        headers={
            "Content-Disposition": f'attachment; filename="{stored.name}"',
            "X-File-Type": stored.metadata.file_type,
        }
    )


@router.delete("/{name}", response_model=OperationResponse)
async def delete_file(
    name: str,
    engine: StorageEngine = Depends(require_storage_engine)
):
    """
    Delete a file and its version shards.

    Raises:
        - 404: File not found
    """
    return OperationResponse(success=engine.delete(name))


@router.patch("/{name}/metadata", response_model=OperationResponse)
async def update_file_metadata(
    name: str,
    request: UpdateMetadataRequest,
    engine: StorageEngine = Depends(require_storage_engine)
):
    """
    Replace a file's tags (when given) and refresh its last-modified time.

    Raises:
        - 404: File not found
    """
    return OperationResponse(success=engine.update_file_metadata(name, request.tags))


@router.post("/{name}/versions", response_model=CreateVersionResponse, status_code=status.HTTP_201_CREATED)
async def create_file_version(
    name: str,
    file: UploadFile = File(...),
    engine: StorageEngine = Depends(require_storage_engine)
):
    """
    Record a version snapshot for an existing file without changing its content.

    Raises:
        - 404: File not found
    """
    content = await file.read()
    version_id, version_count = engine.record_version(name, content)
    logger.info(f"Version {version_id} recorded through API")

    return CreateVersionResponse(
        name=name,
        version_id=version_id,
        version_count=version_count,
    )
