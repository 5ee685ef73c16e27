"""Rename executor.

Applies rendered filenames to files on disk. The new name is always
resolved in the source file's own directory; rendered names never carry
directory components.
"""

import errno
import logging
import os
from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class ConflictPolicy(Enum):
    """What to do when the destination name is already taken."""

    SKIP = "skip"
    UNIQUE = "unique"
    OVERWRITE = "overwrite"


class RenameErrorType(Enum):
    """Categorization of rename errors."""

    CONFLICT = "conflict"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    CROSS_DEVICE = "cross_device"
    IO_ERROR = "io_error"
    INVALID_NAME = "invalid_name"
    UNKNOWN = "unknown"


@dataclass
class RenameResult:
    """Result of a rename operation."""

    success: bool
    source_path: Path
    destination_path: Path | None = None
    error_message: str | None = None
    error_type: RenameErrorType | None = None
    unchanged: bool = False


@dataclass
class RenamePlan:
    """Plan for renaming a file."""

    source_path: Path
    destination_path: Path
    on_conflict: ConflictPolicy = ConflictPolicy.SKIP

    @property
    def is_noop(self) -> bool:
        """True if the file already has the target name."""
        return self.source_path == self.destination_path

    @property
    def targets_source(self) -> bool:
        """True if the destination is the source file itself.

        Covers case-only renames on case-insensitive filesystems, where
        the destination exists because it names the source.
        """
        return self.is_noop or _is_same_file(self.source_path, self.destination_path)


class RenameExecutor:
    """Executor for rename operations."""

    def __init__(self, on_conflict: ConflictPolicy = ConflictPolicy.SKIP) -> None:
        """Initialize the rename executor.

        Args:
            on_conflict: Policy applied when the destination already exists.
        """
        self.on_conflict = on_conflict

    def create_plan(
        self, source_path: Path, new_name: str, claimed: Collection[Path] = ()
    ) -> RenamePlan:
        """Create a rename plan.

        Args:
            source_path: Path to the file to rename.
            new_name: Rendered filename (no directory components).
            claimed: Destinations already planned for other files in the
                same batch; they count as taken.

        Returns:
            RenamePlan. With the UNIQUE policy the destination already has
            a " (n)" suffix if the rendered name is taken.
        """
        destination = source_path.parent / new_name
        plan = RenamePlan(
            source_path=source_path,
            destination_path=destination,
            on_conflict=self.on_conflict,
        )
        if (
            self.on_conflict is ConflictPolicy.UNIQUE
            and _is_plain_name(source_path, destination)
            and not plan.targets_source
            and (destination.exists() or destination in claimed)
        ):
            plan.destination_path = ensure_unique_path(destination, taken=claimed)
        return plan

    def validate(
        self, plan: RenamePlan, claimed: Collection[Path] = ()
    ) -> list[str]:
        """Validate a rename plan.

        Args:
            plan: Rename plan to validate.
            claimed: Destinations already planned for other files in the
                same batch; they conflict like existing files.

        Returns:
            List of validation errors (empty if valid).
        """
        errors = []

        if not plan.source_path.exists():
            errors.append(f"Source file does not exist: {plan.source_path}")
        elif not plan.source_path.is_file():
            errors.append(f"Source is not a file: {plan.source_path}")

        if not _is_plain_name(plan.source_path, plan.destination_path):
            errors.append(
                f"Invalid destination name: {plan.destination_path.name!r}"
            )

        if (
            plan.on_conflict is not ConflictPolicy.OVERWRITE
            and (plan.destination_path.exists() or plan.destination_path in claimed)
            and not plan.targets_source
        ):
            errors.append(f"Destination already exists: {plan.destination_path}")

        return errors

    def execute(self, plan: RenamePlan) -> RenameResult:
        """Execute a rename plan.

        Args:
            plan: The rename plan to execute.

        Returns:
            RenameResult with success status and details.
        """
        if plan.is_noop and plan.source_path.is_file():
            logger.info("Already named: %s", plan.source_path)
            return RenameResult(
                success=True,
                source_path=plan.source_path,
                destination_path=plan.destination_path,
                unchanged=True,
            )

        errors = self.validate(plan)
        if errors:
            if any(e.startswith("Invalid destination") for e in errors):
                error_type = RenameErrorType.INVALID_NAME
            elif any(e.startswith("Destination already exists") for e in errors):
                error_type = RenameErrorType.CONFLICT
            else:
                error_type = RenameErrorType.NOT_FOUND
            return RenameResult(
                success=False,
                source_path=plan.source_path,
                error_message="; ".join(errors),
                error_type=error_type,
            )

        try:
            logger.info("Renaming: %s -> %s", plan.source_path, plan.destination_path)
            os.replace(plan.source_path, plan.destination_path)
            return RenameResult(
                success=True,
                source_path=plan.source_path,
                destination_path=plan.destination_path,
            )

        except OSError as e:
            errno_to_type = {
                errno.EACCES: RenameErrorType.PERMISSION,
                errno.EPERM: RenameErrorType.PERMISSION,
                errno.ENOENT: RenameErrorType.NOT_FOUND,
                errno.EXDEV: RenameErrorType.CROSS_DEVICE,
                errno.EIO: RenameErrorType.IO_ERROR,
                errno.EROFS: RenameErrorType.IO_ERROR,
                errno.ENAMETOOLONG: RenameErrorType.INVALID_NAME,
                errno.EINVAL: RenameErrorType.INVALID_NAME,
            }
            error_type = errno_to_type.get(e.errno, RenameErrorType.UNKNOWN)

            logger.error("Rename failed (%s): %s", error_type.value, e)
            return RenameResult(
                success=False,
                source_path=plan.source_path,
                error_message=str(e),
                error_type=error_type,
            )

    def dry_run(self, plan: RenamePlan, claimed: Collection[Path] = ()) -> dict:
        """Generate dry-run output showing what would be done.

        Args:
            plan: The rename plan.
            claimed: Destinations planned earlier in the same batch.

        Returns:
            Dictionary with planned operation.
        """
        errors = [] if plan.is_noop else self.validate(plan, claimed)

        return {
            "source": str(plan.source_path),
            "destination": str(plan.destination_path),
            "on_conflict": plan.on_conflict.value,
            "unchanged": plan.is_noop,
            "valid": len(errors) == 0,
            "errors": errors,
        }


def _is_plain_name(source_path: Path, destination_path: Path) -> bool:
    return (
        destination_path.parent == source_path.parent
        and destination_path.name not in ("", ".", "..")
    )


def _is_same_file(source_path: Path, destination_path: Path) -> bool:
    try:
        return source_path.samefile(destination_path)
    except OSError:
        return False


# Maximum number of suffix attempts before giving up
MAX_UNIQUE_PATH_ATTEMPTS = 10000


def ensure_unique_path(
    path: Path,
    max_attempts: int = MAX_UNIQUE_PATH_ATTEMPTS,
    taken: Collection[Path] = (),
) -> Path:
    """Ensure a path is unique by adding a suffix if needed.

    If the path already exists or is in ``taken``, adds (1), (2), etc.
    until unique.

    Args:
        path: Desired path.
        max_attempts: Maximum number of attempts before raising error.
        taken: Paths to treat as existing.

    Returns:
        Unique path that doesn't exist.

    Raises:
        RuntimeError: If no unique path found within max_attempts.
    """
    if not path.exists() and path not in taken:
        return path

    base = path.stem
    suffix = path.suffix
    parent = path.parent

    for counter in range(1, max_attempts + 1):
        new_path = parent / f"{base} ({counter}){suffix}"
        if not new_path.exists() and new_path not in taken:
            return new_path

    raise RuntimeError(
        f"Could not find unique path after {max_attempts} attempts: {path}"
    )
