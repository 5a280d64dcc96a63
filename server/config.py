"""Configuration settings for the file store server."""

import os


SERVER_HOST = os.environ.get("FILESTORE_HOST", "0.0.0.0")

SERVER_PORT = int(os.environ.get("FILESTORE_PORT", "8000"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
