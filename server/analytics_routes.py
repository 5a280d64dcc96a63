"""Storage analytics API routes."""

from fastapi import APIRouter, Depends

from filestore.engine import StorageEngine
from server.schemas import FileTypeDistributionResponse, StorageAnalyticsResponse
from server.service_locator import require_storage_engine

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=StorageAnalyticsResponse)
async def storage_analytics(engine: StorageEngine = Depends(require_storage_engine)):
    """
    Report current usage, total capacity and the number of stored files.
    """
    analytics = engine.get_storage_analytics()
    return StorageAnalyticsResponse(
        storage_usage=analytics.storage_usage,
        max_storage_size=analytics.max_storage_size,
        file_count=analytics.file_count,
    )


@router.get("/file-types", response_model=FileTypeDistributionResponse)
async def file_type_distribution(engine: StorageEngine = Depends(require_storage_engine)):
    return FileTypeDistributionResponse(distribution=engine.get_file_type_distribution())
