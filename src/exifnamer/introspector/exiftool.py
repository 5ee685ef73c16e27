"""exiftool runner producing metadata dumps."""

import shutil
import subprocess  # nosec B404 - only used for the TimeoutExpired type
from pathlib import Path

from exifnamer.core.subprocess_utils import run_command
from exifnamer.metadata.exceptions import ExifNamerError


class ExifToolError(ExifNamerError):
    """Raised when exiftool is missing or fails for a file."""


class ExifToolRunner:
    """Runs exiftool and returns its default ``tag : value`` listing.

    The output is meant for exifnamer.metadata.record.parse_metadata_dump().
    """

    def __init__(self, exiftool_path: Path | None = None, timeout: int = 30) -> None:
        """Initialize the runner.

        Args:
            exiftool_path: Explicit path to exiftool. If not provided,
                exiftool is looked up in PATH.
            timeout: Seconds to wait for exiftool per file.

        Raises:
            ExifToolError: If exiftool is not available.
        """
        self._exiftool_path = exiftool_path or self.find_exiftool()
        self._timeout = timeout

        if self._exiftool_path is None:
            raise ExifToolError(
                "exiftool is not installed or not in PATH. "
                "Install exiftool, set EXIFNAMER_EXIFTOOL_PATH, or pass "
                "a pre-generated dump with --exif."
            )

    @staticmethod
    def find_exiftool() -> Path | None:
        """Locate exiftool in PATH.

        Returns:
            Path to exiftool, or None if not found.
        """
        found = shutil.which("exiftool")
        return Path(found) if found else None

    @classmethod
    def is_available(cls) -> bool:
        """Check if exiftool is available on the system."""
        return cls.find_exiftool() is not None

    @property
    def exiftool_path(self) -> Path:
        """Path of the exiftool executable in use."""
        assert self._exiftool_path is not None
        return self._exiftool_path

    def read_dump(self, path: Path) -> str:
        """Run exiftool on a file and return its listing.

        Args:
            path: Path to the media file.

        Returns:
            exiftool's stdout.

        Raises:
            ExifToolError: If the file is missing, exiftool cannot run,
                exits non-zero, or times out.
        """
        if not path.exists():
            raise ExifToolError(f"File not found: {path}")

        # Absolute, so a name like "-x.jpg" is never read as an option
        try:
            result = run_command(
                [self.exiftool_path, path.resolve()], timeout=self._timeout
            )
        except subprocess.TimeoutExpired as e:
            raise ExifToolError(
                f"exiftool timed out for {path} after {e.timeout}s"
            ) from e
        except OSError as e:
            raise ExifToolError(f"Could not run exiftool for {path}: {e}") from e

        if not result.ok:
            raise ExifToolError(
                f"exiftool failed for {path} (exit {result.returncode}): "
                f"{result.stderr.strip()}"
            )
        return result.stdout
