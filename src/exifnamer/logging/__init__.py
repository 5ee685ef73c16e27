"""Structured logging for exifnamer.

Provides text or JSON log output with optional file rotation, and a
per-file context that tags records with the file being renamed.
"""

from exifnamer.logging.config import configure_logging
from exifnamer.logging.context import (
    FileContextFilter,
    file_context,
    get_file_context,
)
from exifnamer.logging.handlers import JSONFormatter

__all__ = [
    "FileContextFilter",
    "JSONFormatter",
    "configure_logging",
    "file_context",
    "get_file_context",
]
