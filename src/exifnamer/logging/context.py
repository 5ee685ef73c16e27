"""Per-file logging context.

While a file is being renamed, every log record is tagged with that file's
path, so batch logs stay readable without threading the path through
every call.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


@contextmanager
def file_context(file_path: Path | str) -> Generator[None, None, None]:
    """Tag log records emitted inside the block with a file path.

    Nested blocks restore the outer path on exit.

    Args:
        file_path: Path of the file being processed.

    Example:
        with file_context("/photos/IMG_1234.JPG"):
            logger.info("Renaming")  # Record carries file_path
    """
    token = _file_path.set(str(file_path))
    try:
        yield
    finally:
        _file_path.reset(token)


def get_file_context() -> str | None:
    """Return the file path of the current context, or None."""
    return _file_path.get()


class FileContextFilter(logging.Filter):
    """Logging filter that injects the current file into log records.

    Adds ``file_path`` for JSON output and ``file_tag`` (``[IMG_1234.JPG] ``
    or an empty string) for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject file context into the log record.

        Args:
            record: The log record to process.

        Returns:
            Always True (does not filter, only enriches).
        """
        file_path = _file_path.get()
        record.file_path = file_path
        record.file_tag = f"[{Path(file_path).name}] " if file_path else ""
        return True
