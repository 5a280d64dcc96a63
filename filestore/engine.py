"""Storage engine: file CRUD, versioning, tag search and usage analytics."""

import itertools
import threading
import time
from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from common.constants import CHUNK_SIZE_BYTES
from common.logging_config import get_logger
from filestore.chunking import split_into_chunks
from filestore.exceptions import FileNotFoundError, StorageLimitError, StorageSystemError
from filestore.models import FileMetadata, StorageAnalytics, StoredFile
from filestore.state import StorageState

logger = get_logger(__name__)


def current_timestamp() -> int:
    """
    Get current time as whole seconds since the epoch.

    Returns:
        Current timestamp
    """
    return int(time.time())


class StorageEngine:
    """
    In-memory file store guarding a single StorageState.

    Every public operation holds the engine lock for its whole duration, so
    operations are serialized and never observe each other's partial writes.
    Validation happens before any mutation; a rejected operation leaves the
    state untouched.
    """

    def __init__(
        self,
        state: Optional[StorageState] = None,
        clock: Callable[[], int] = current_timestamp,
        chunk_size: int = CHUNK_SIZE_BYTES,
        max_file_size: Optional[int] = None,
        max_storage_size: Optional[int] = None,
    ):
        self.state = state if state is not None else StorageState()
        if max_file_size is not None:
            self.state.max_file_size = max_file_size
        if max_storage_size is not None:
            self.state.max_storage_size = max_storage_size
        self.chunk_size = chunk_size
        self._clock = clock
        self._lock = threading.RLock()
        self._version_sequence = itertools.count(1)

    def upload(self, name: str, content: bytes, file_type: str, tags: Iterable[str]) -> bool:
        """
        Store content under name, replacing any file already stored there.

        Args:
            name: File name (map key)
            content: Raw file bytes
            file_type: Free-form type label
            tags: Tags to attach

        Returns:
            True on success

        Raises:
            StorageLimitError: If content exceeds the per-file cap or the total capacity
        """
        content = bytes(content)
        size = len(content)

        with self._lock:
            state = self.state

            if size > state.max_file_size:
                logger.warning(
                    f"Upload rejected for {name}: {size} bytes exceeds per-file limit of {state.max_file_size}"
                )
                raise StorageLimitError(
                    f"File '{name}' is {size} bytes, limit is {state.max_file_size} bytes"
                )

            existing = state.files.get(name)
            replaced_size = len(existing.content) if existing else 0

            if not state.fits(size, replaced_size):
                logger.warning(
                    f"Upload rejected for {name}: usage {state.storage_usage} + {size} bytes "
                    f"exceeds capacity {state.max_storage_size}"
                )
                raise StorageLimitError(
                    f"Storing '{name}' ({size} bytes) would exceed capacity of {state.max_storage_size} bytes"
                )

            now = self._clock()
            metadata = FileMetadata(
                name=name,
                size=size,
                upload_timestamp=now,
                last_modified=now,
                file_type=file_type,
                is_encrypted=False,
                version_history=[],
                tags=list(tags),
            )

            if existing:
                dropped = state.version_chunks.remove_many(existing.metadata.version_history)
                logger.info(
                    f"Replacing existing file {name} ({replaced_size} bytes, {dropped} version shards dropped)"
                )

            state.files[name] = StoredFile(name=name, content=content, metadata=metadata)
            state.chunks.put(split_into_chunks(name, content, self.chunk_size))
            state.storage_usage += size - replaced_size

            logger.info(f"Uploaded file {name} ({size} bytes, type={file_type!r})")
            return True

    def download(self, name: str) -> StoredFile:
        """
        Return a copy of the stored file.

        Raises:
            FileNotFoundError: If no file is stored under name
        """
        with self._lock:
            stored = self._get_file(name)
            logger.debug(f"Downloaded file {name}")
            return stored.snapshot()

    def delete(self, name: str) -> bool:
        """
        Remove a file, its chunk shard and the shards of its versions.

        Returns:
            True on success

        Raises:
            FileNotFoundError: If no file is stored under name
        """
        with self._lock:
            stored = self._get_file(name)
            state = self.state

            del state.files[name]
            state.chunks.remove(name)
            dropped = state.version_chunks.remove_many(stored.metadata.version_history)
            state.storage_usage -= len(stored.content)

            logger.info(
                f"Deleted file {name} ({len(stored.content)} bytes, {dropped} version shards dropped)"
            )
            return True

    def update_file_metadata(self, name: str, new_tags: Optional[Iterable[str]] = None) -> bool:
        """
        Replace a file's tags and refresh its last-modified time.

        Args:
            name: File name
            new_tags: Replacement tag list; None keeps the current tags

        Returns:
            True on success

        Raises:
            FileNotFoundError: If no file is stored under name
        """
        with self._lock:
            metadata = self._get_file(name).metadata
            if new_tags is not None:
                metadata.tags = list(new_tags)
            metadata.last_modified = self._clock()

            logger.info(f"Updated metadata for {name} (tags={metadata.tags})")
            return True

    def create_file_version(self, name: str, content: bytes) -> bool:
        """
        Record a version snapshot of content for an existing file.

        Returns:
            True on success

        Raises:
            FileNotFoundError: If no file is stored under name
        """
        self.record_version(name, content)
        return True

    def record_version(self, name: str, content: bytes) -> Tuple[str, int]:
        """
        Record a version snapshot and report the id it was stored under.

        The file's current content, size and the storage usage are not
        changed; the snapshot lives only as a version shard keyed by the new
        version id.

        Returns:
            (new version id, number of versions now recorded for the file)

        Raises:
            FileNotFoundError: If no file is stored under name
        """
        with self._lock:
            metadata = self._get_file(name).metadata
            version_id = f"{name}_{self._clock()}_{next(self._version_sequence)}"

            metadata.version_history.append(version_id)
            self.state.version_chunks.put(split_into_chunks(version_id, bytes(content), self.chunk_size))

            logger.info(f"Created version {version_id} for {name} ({len(content)} bytes)")
            return version_id, len(metadata.version_history)

    def search_by_tags(self, tags: Iterable[str]) -> List[StoredFile]:
        """
        Find files carrying every one of the given tags.

        An empty tag list matches every file.

        Returns:
            Copies of the matching files
        """
        query = set(tags)
        with self._lock:
            matches = [
                stored.snapshot()
                for stored in self.state.files.values()
                if stored.metadata.has_tags(query)
            ]
        logger.debug(f"Tag search {sorted(query)} matched {len(matches)} files")
        return matches

    def get_storage_analytics(self) -> StorageAnalytics:
        with self._lock:
            return StorageAnalytics(
                storage_usage=self.state.storage_usage,
                max_storage_size=self.state.max_storage_size,
                file_count=len(self.state.files),
            )

    def get_file_type_distribution(self) -> Dict[str, int]:
        with self._lock:
            counts = Counter(stored.metadata.file_type for stored in self.state.files.values())
        return dict(counts)

    def chunk_shard_keys(self) -> List[str]:
        with self._lock:
            return self.state.chunks.keys()

    def version_shard_keys(self) -> List[str]:
        with self._lock:
            return self.state.version_chunks.keys()

    def verify_integrity(self) -> bool:
        """
        Check the usage counter and the file shards against stored content.

        Returns:
            True if every check passes

        Raises:
            StorageSystemError: Describing the first inconsistency found
        """
        with self._lock:
            state = self.state
            actual_usage = state.computed_usage()
            if actual_usage != state.storage_usage:
                raise StorageSystemError(
                    f"Usage counter is {state.storage_usage} bytes but stored content totals {actual_usage}"
                )

            for name, stored in state.files.items():
                if stored.metadata.name != name or stored.name != name:
                    raise StorageSystemError(f"File stored under {name!r} is named {stored.name!r}")
                if stored.metadata.size != len(stored.content):
                    raise StorageSystemError(
                        f"File {name} records size {stored.metadata.size} but holds {len(stored.content)} bytes"
                    )
                shard = state.chunks.get(name)
                if shard is None:
                    raise StorageSystemError(f"File {name} has no chunk shard")
                if not shard.verify() or shard.reassemble() != stored.content:
                    raise StorageSystemError(f"Chunk shard for {name} does not match its content")

                for version_id in stored.metadata.version_history:
                    version_shard = state.version_chunks.get(version_id)
                    if version_shard is None or not version_shard.verify():
                        raise StorageSystemError(f"Version shard {version_id} is missing or corrupt")

            recorded = {
                version_id
                for stored in state.files.values()
                for version_id in stored.metadata.version_history
            }
            orphaned = sorted(set(state.version_chunks.keys()) - recorded)
            if orphaned:
                raise StorageSystemError(f"Version shards without a live file: {orphaned}")

        return True

    def _get_file(self, name: str) -> StoredFile:
        stored = self.state.files.get(name)
        if stored is None:
            logger.warning(f"File not found: {name}")
            raise FileNotFoundError(f"File '{name}' not found")
        return stored
