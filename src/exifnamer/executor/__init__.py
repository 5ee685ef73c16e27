"""Filesystem operations applying rendered filenames."""

from exifnamer.executor.rename import (
    ConflictPolicy,
    RenameErrorType,
    RenameExecutor,
    RenamePlan,
    RenameResult,
    ensure_unique_path,
)

__all__ = [
    "ConflictPolicy",
    "RenameErrorType",
    "RenameExecutor",
    "RenamePlan",
    "RenameResult",
    "ensure_unique_path",
]
