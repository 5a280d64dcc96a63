"""In-memory file storage engine."""

from filestore.engine import StorageEngine
from filestore.models import FileMetadata, StorageAnalytics, StoredFile
from filestore.state import StorageState

__all__ = [
    "StorageEngine",
    "StorageState",
    "StoredFile",
    "FileMetadata",
    "StorageAnalytics",
]
