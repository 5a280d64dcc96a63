"""Data types for stored files and their metadata."""

import copy
from dataclasses import dataclass, field
from typing import List, NamedTuple


@dataclass
class FileMetadata:
    """
    Descriptive record attached to a stored file.
    """
    name: str
    size: int
    upload_timestamp: int
    last_modified: int
    file_type: str
    is_encrypted: bool = False
    version_history: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def has_tags(self, tags) -> bool:
        """
        Check whether every given tag is attached to the file.

        Args:
            tags: Iterable of tags to look for

        Returns:
            True if all tags are present (always True for no tags)
        """
        return set(tags).issubset(self.tags)


@dataclass
class StoredFile:
    """
    A named byte sequence plus its metadata.
    """
    name: str
    content: bytes
    metadata: FileMetadata

    def snapshot(self) -> "StoredFile":
        """Return an independent copy safe to hand out to callers."""
        return copy.deepcopy(self)


class StorageAnalytics(NamedTuple):
    storage_usage: int
    max_storage_size: int
    file_count: int
