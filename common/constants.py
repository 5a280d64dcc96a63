"""Project-wide constants (storage limits, chunk size)."""

MAX_FILE_SIZE_BYTES: int = 10 * 1024 * 1024  # 10 MiB per file
CHUNK_SIZE_BYTES: int = 1024 * 1024  # 1 MiB per chunk
MAX_STORAGE_SIZE_BYTES: int = 1024 * 1024 * 1024  # 1 GiB total capacity
