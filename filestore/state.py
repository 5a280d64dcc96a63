"""Storage state container: files, chunk shards and quota counters."""

from dataclasses import dataclass, field
from typing import Dict

from common.constants import MAX_FILE_SIZE_BYTES, MAX_STORAGE_SIZE_BYTES
from filestore.chunk_index import ChunkShardIndex
from filestore.models import StoredFile


@dataclass
class StorageState:
    """
    All mutable data owned by one storage engine.

    storage_usage always equals the summed content length of the files in
    `files`; version shards are not counted. File shards are keyed by file
    name in `chunks`, version shards by version id in `version_chunks`, so a
    file name that looks like a version id never reaches a version shard.
    """
    files: Dict[str, StoredFile] = field(default_factory=dict)
    chunks: ChunkShardIndex = field(default_factory=ChunkShardIndex)
    version_chunks: ChunkShardIndex = field(default_factory=ChunkShardIndex)
    storage_usage: int = 0
    max_storage_size: int = MAX_STORAGE_SIZE_BYTES
    max_file_size: int = MAX_FILE_SIZE_BYTES

    def fits(self, new_size: int, replaced_size: int = 0) -> bool:
        """
        Check whether content of new_size fits in the remaining capacity.

        Args:
            new_size: Length of the incoming content
            replaced_size: Length of the content it replaces, if any

        Returns:
            True if usage would stay within max_storage_size
        """
        return self.storage_usage - replaced_size + new_size <= self.max_storage_size

    def computed_usage(self) -> int:
        return sum(len(stored.content) for stored in self.files.values())
