"""In-memory index: shard key (file name or version id) -> ChunkShard."""

from typing import Dict, Iterable, List, Optional

from common.logging_config import get_logger
from filestore.chunking import ChunkShard

logger = get_logger(__name__)


class ChunkShardIndex:
    """
    In-memory index mapping file names and version ids to chunk shards.
    """

    def __init__(self):
        """Initialize empty shard index."""
        self._index: Dict[str, ChunkShard] = {}

    def put(self, shard: ChunkShard) -> None:
        """
        Add or replace the shard stored under shard.key.

        Args:
            shard: ChunkShard to store
        """
        self._index[shard.key] = shard
        logger.debug(f"Stored shard {shard.key} with {len(shard.chunks)} chunks")

    def get(self, key: str) -> Optional[ChunkShard]:
        """
        Retrieve a shard by key.

        Args:
            key: File name or version id

        Returns:
            ChunkShard if found, None otherwise
        """
        return self._index.get(key)

    def remove(self, key: str) -> bool:
        """
        Remove a shard from the index.

        Args:
            key: File name or version id

        Returns:
            True if shard was removed, False if not found
        """
        if key in self._index:
            del self._index[key]
            return True
        return False

    def remove_many(self, keys: Iterable[str]) -> int:
        """
        Remove several shards.

        Args:
            keys: Keys to remove; unknown keys are skipped

        Returns:
            Number of shards actually removed
        """
        return sum(1 for key in keys if self.remove(key))

    def contains(self, key: str) -> bool:
        return key in self._index

    def keys(self) -> List[str]:
        """
        Get all shard keys, sorted.

        Returns:
            List of keys
        """
        return sorted(self._index)

    def count(self) -> int:
        return len(self._index)
