"""HTTP transport for the in-memory file store."""
