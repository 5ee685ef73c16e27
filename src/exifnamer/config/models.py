"""Configuration data models.

This module defines dataclasses for exifnamer configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

VALID_CONFLICT_POLICIES = frozenset({"skip", "unique", "overwrite"})
VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
VALID_LOG_FORMATS = frozenset({"text", "json"})


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.lower() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.lower() not in VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(VALID_LOG_FORMATS)}, got {self.format}"
            )


@dataclass
class ExifToolConfig:
    """Configuration for the exiftool executable.

    If path is not specified, exiftool is looked up in PATH.
    """

    path: Path | None = None
    timeout_seconds: int = 30

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.timeout_seconds <= 600:
            raise ValueError("timeout_seconds must be between 1 and 600")


@dataclass
class RenameConfig:
    """Configuration for renaming behavior."""

    # Default filename template (None = must be given on the command line)
    pattern: str | None = None

    # What to do when the rendered name already exists: skip, unique, overwrite
    on_conflict: str = "skip"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.on_conflict.lower() not in VALID_CONFLICT_POLICIES:
            raise ValueError(
                f"on_conflict must be one of {sorted(VALID_CONFLICT_POLICIES)}, "
                f"got {self.on_conflict}"
            )


@dataclass
class AppConfig:
    """Main exifnamer configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    exiftool: ExifToolConfig = field(default_factory=ExifToolConfig)
    rename: RenameConfig = field(default_factory=RenameConfig)
