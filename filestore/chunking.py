"""Splits content into fixed-size chunks and verifies them with SHA-256 checksums."""

import hashlib
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from common.constants import CHUNK_SIZE_BYTES


def compute_checksum(data: bytes) -> str:
    """
    Compute SHA-256 checksum for given data.

    Args:
        data: Bytes to compute checksum for

    Returns:
        Hexadecimal string representation of SHA-256 hash
    """
    return hashlib.sha256(data).hexdigest()


def verify_checksum(data: bytes, expected: str) -> bool:
    """
    Verify that data matches expected checksum.

    Args:
        data: Bytes to verify
        expected: Expected SHA-256 checksum (hex string)

    Returns:
        True if checksum matches, False otherwise
    """
    return compute_checksum(data) == expected


@dataclass(frozen=True)
class ChunkDescriptor:
    """
    Metadata for a single chunk of a shard.
    """
    chunk_index: int
    size: int
    checksum: str


@dataclass(frozen=True)
class ChunkShard:
    """
    Content split into ordered fixed-size blocks, stored as a derived copy.
    """
    key: str
    chunks: Tuple[bytes, ...]
    descriptors: Tuple[ChunkDescriptor, ...]

    @property
    def total_size(self) -> int:
        return sum(descriptor.size for descriptor in self.descriptors)

    def reassemble(self) -> bytes:
        """Join the blocks back into the byte sequence they were cut from."""
        return b"".join(self.chunks)

    def verify(self) -> bool:
        """
        Check every block against its descriptor.

        Returns:
            True if all sizes and checksums match, False otherwise
        """
        if len(self.chunks) != len(self.descriptors):
            return False
        for data, descriptor in zip(self.chunks, self.descriptors):
            if len(data) != descriptor.size:
                return False
            if not verify_checksum(data, descriptor.checksum):
                return False
        return True


def iter_chunks(content: bytes, chunk_size: int = CHUNK_SIZE_BYTES) -> Iterator[Tuple[ChunkDescriptor, bytes]]:
    """
    Yield (descriptor, data) pairs for consecutive blocks of content.

    Args:
        content: Bytes to split
        chunk_size: Maximum block length; the last block may be shorter

    Yields:
        Descriptor and data for each block, in order
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    for chunk_index, offset in enumerate(range(0, len(content), chunk_size)):
        data = bytes(content[offset:offset + chunk_size])
        yield ChunkDescriptor(
            chunk_index=chunk_index,
            size=len(data),
            checksum=compute_checksum(data),
        ), data


def split_into_chunks(key: str, content: bytes, chunk_size: int = CHUNK_SIZE_BYTES) -> ChunkShard:
    """
    Build a chunk shard for content stored under key.

    Empty content produces a shard with no blocks.

    Args:
        key: File name or version id the shard is stored under
        content: Bytes to split
        chunk_size: Block length

    Returns:
        ChunkShard holding the blocks and their descriptors
    """
    descriptors: List[ChunkDescriptor] = []
    chunks: List[bytes] = []
    for descriptor, data in iter_chunks(content, chunk_size):
        descriptors.append(descriptor)
        chunks.append(data)
    return ChunkShard(key=key, chunks=tuple(chunks), descriptors=tuple(descriptors))
