"""Exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Usage errors (pattern, config)
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
    50-59: Metadata errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for exifnamer CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2

    # Usage errors (10-19)
    PATTERN_ERROR = 10
    CONFIG_ERROR = 11

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20
    DUMP_NOT_FOUND = 21

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    RENAME_FAILED = 40

    # Metadata errors (50-59)
    METADATA_ERROR = 50
