"""Service locator for the storage engine instance served over HTTP."""

from typing import Optional

from filestore.engine import StorageEngine
from filestore.exceptions import StorageSystemError

_storage_engine: Optional[StorageEngine] = None


def set_storage_engine(engine: Optional[StorageEngine]):
    """Set global storage engine instance"""
    global _storage_engine
    _storage_engine = engine


def get_storage_engine() -> Optional[StorageEngine]:
    """Get global storage engine instance"""
    return _storage_engine


def require_storage_engine() -> StorageEngine:
    """
    FastAPI dependency returning the registered engine.

    Raises:
        StorageSystemError: If no engine has been registered yet
    """
    if _storage_engine is None:
        raise StorageSystemError("Storage engine is not initialized")
    return _storage_engine
