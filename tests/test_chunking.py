"""Tests for chunk splitting, checksums and the shard index."""

import pytest

from common.constants import CHUNK_SIZE_BYTES
from filestore.chunk_index import ChunkShardIndex
from filestore.chunking import (
    ChunkShard,
    compute_checksum,
    iter_chunks,
    split_into_chunks,
    verify_checksum,
)


class TestChecksums:
    """Test SHA-256 helpers."""

    def test_known_digest(self):
        assert compute_checksum(b"") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_verify_checksum(self):
        checksum = compute_checksum(b"data")
        assert verify_checksum(b"data", checksum) is True
        assert verify_checksum(b"Data", checksum) is False


class TestSplitIntoChunks:
    """Test chunk splitting."""

    def test_even_split(self):
        shard = split_into_chunks("f", b"abcdefgh", chunk_size=4)

        assert shard.key == "f"
        assert shard.chunks == (b"abcd", b"efgh")
        assert [d.chunk_index for d in shard.descriptors] == [0, 1]
        assert shard.total_size == 8

    def test_last_chunk_is_shorter(self):
        shard = split_into_chunks("f", b"abcdefghij", chunk_size=4)

        assert [d.size for d in shard.descriptors] == [4, 4, 2]
        assert shard.reassemble() == b"abcdefghij"
        assert shard.verify() is True

    def test_empty_content_has_no_chunks(self):
        shard = split_into_chunks("f", b"", chunk_size=4)

        assert shard.chunks == ()
        assert shard.reassemble() == b""
        assert shard.verify() is True

    def test_default_chunk_size_is_one_mebibyte(self):
        content = bytes(range(256)) * (CHUNK_SIZE_BYTES // 256) + b"tail"

        shard = split_into_chunks("big", content)

        assert len(shard.chunks) == 2
        assert shard.descriptors[0].size == CHUNK_SIZE_BYTES
        assert shard.descriptors[1].size == 4
        assert shard.reassemble() == content

    def test_descriptor_checksums_match_data(self):
        for descriptor, data in iter_chunks(b"0123456789", chunk_size=3):
            assert descriptor.checksum == compute_checksum(data)

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            split_into_chunks("f", b"abc", chunk_size=0)

    def test_verify_detects_tampering(self):
        shard = split_into_chunks("f", b"abcdefgh", chunk_size=4)
        tampered = ChunkShard(
            key=shard.key,
            chunks=(b"abcd", b"efgX"),
            descriptors=shard.descriptors,
        )

        assert tampered.verify() is False

    def test_verify_detects_missing_chunk(self):
        shard = split_into_chunks("f", b"abcdefgh", chunk_size=4)
        truncated = ChunkShard(key=shard.key, chunks=shard.chunks[:1], descriptors=shard.descriptors)

        assert truncated.verify() is False


class TestChunkShardIndex:
    """Test the in-memory shard index."""

    def test_put_and_get(self):
        index = ChunkShardIndex()
        shard = split_into_chunks("a", b"abc", chunk_size=2)

        index.put(shard)

        assert index.get("a") is shard
        assert index.contains("a") is True
        assert index.count() == 1

    def test_put_replaces_existing_key(self):
        index = ChunkShardIndex()
        index.put(split_into_chunks("a", b"old", chunk_size=2))
        index.put(split_into_chunks("a", b"new!", chunk_size=2))

        assert index.get("a").reassemble() == b"new!"
        assert index.count() == 1

    def test_get_missing_returns_none(self):
        assert ChunkShardIndex().get("missing") is None

    def test_remove(self):
        index = ChunkShardIndex()
        index.put(split_into_chunks("a", b"abc"))

        assert index.remove("a") is True
        assert index.remove("a") is False
        assert index.contains("a") is False

    def test_remove_many_skips_unknown_keys(self):
        index = ChunkShardIndex()
        for key in ("a", "b", "c"):
            index.put(split_into_chunks(key, key.encode()))

        removed = index.remove_many(["a", "c", "zzz"])

        assert removed == 2
        assert index.keys() == ["b"]

    def test_keys_are_sorted(self):
        index = ChunkShardIndex()
        for key in ("b", "c", "a"):
            index.put(split_into_chunks(key, b"x"))

        assert index.keys() == ["a", "b", "c"]
