"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI flags (--pattern, --on-conflict and --log-*, applied by the commands)
2. Environment variables (EXIFNAMER_*)
3. Config file (~/.exifnamer/config.toml)
4. Default values

Environment variables:
- EXIFNAMER_CONFIG_PATH: Path to config file (overrides default location)
- EXIFNAMER_EXIFTOOL_PATH: Path to exiftool executable
- EXIFNAMER_EXIFTOOL_TIMEOUT: Seconds to wait for exiftool per file
- EXIFNAMER_PATTERN: Default filename template
- EXIFNAMER_ON_CONFLICT: skip, unique or overwrite
- EXIFNAMER_LOG_LEVEL: debug, info, warning or error
- EXIFNAMER_LOG_FILE: Path to log file

Example config.toml::

    [rename]
    pattern = "{Y}{m}{D}_{t}_{r}.{e}"
    on_conflict = "unique"

    [exiftool]
    path = "/usr/local/bin/exiftool"
    timeout_seconds = 60

    [logging]
    level = "debug"
    format = "json"
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from exifnamer.config.env import EnvReader
from exifnamer.config.models import (
    VALID_CONFLICT_POLICIES,
    VALID_LOG_LEVELS,
    AppConfig,
    ExifToolConfig,
    LoggingConfig,
    RenameConfig,
)
from exifnamer.metadata.exceptions import ExifNamerError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".exifnamer"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(ExifNamerError):
    """Raised when configuration cannot be loaded or is invalid."""


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by EXIFNAMER_CONFIG_PATH environment variable.

    Returns:
        Path to config file.
    """
    reader = env_reader or EnvReader()
    env_path = reader.get_path("EXIFNAMER_CONFIG_PATH", must_exist=False)
    return env_path if env_path is not None else DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError when the file is missing or cannot
            be read or parsed. If False (default), return {} instead.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist and
        strict is False.

    Raises:
        ConfigError: When strict=True and the file cannot be loaded.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        if strict:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Could not load config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def _section(file_config: dict, name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    return section if isinstance(section, dict) else {}


def _first_set(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def get_config(
    config_path: Path | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> AppConfig:
    """Get exifnamer configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides EXIFNAMER_CONFIG_PATH).
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on missing or unreadable config
            files.

    Returns:
        AppConfig with merged configuration.

    Raises:
        ConfigError: If a value is invalid, or (strict only) the config file
            is missing or cannot be loaded.
    """
    reader = env_reader or EnvReader()
    if config_path is None:
        config_path = get_default_config_path(reader)

    file_config = load_config_file(config_path, strict=strict)
    file_logging = _section(file_config, "logging")
    file_exiftool = _section(file_config, "exiftool")
    file_rename = _section(file_config, "rename")

    file_exiftool_path = file_exiftool.get("path")
    file_log_file = file_logging.get("file")

    try:
        return AppConfig(
            logging=LoggingConfig(
                level=_first_set(
                    reader.get_choice("EXIFNAMER_LOG_LEVEL", VALID_LOG_LEVELS),
                    file_logging.get("level"),
                    "info",
                ),
                file=_first_set(
                    reader.get_path("EXIFNAMER_LOG_FILE", must_exist=False),
                    Path(file_log_file).expanduser() if file_log_file else None,
                ),
                format=file_logging.get("format", "text"),
                include_stderr=bool(file_logging.get("include_stderr", False)),
                max_bytes=int(file_logging.get("max_bytes", 10_485_760)),
                backup_count=int(file_logging.get("backup_count", 5)),
            ),
            exiftool=ExifToolConfig(
                path=_first_set(
                    reader.get_path("EXIFNAMER_EXIFTOOL_PATH"),
                    Path(file_exiftool_path).expanduser()
                    if file_exiftool_path
                    else None,
                ),
                timeout_seconds=_first_set(
                    reader.get_int("EXIFNAMER_EXIFTOOL_TIMEOUT"),
                    file_exiftool.get("timeout_seconds"),
                    30,
                ),
            ),
            rename=RenameConfig(
                pattern=_first_set(
                    reader.get_str("EXIFNAMER_PATTERN"),
                    file_rename.get("pattern"),
                ),
                on_conflict=_first_set(
                    reader.get_choice(
                        "EXIFNAMER_ON_CONFLICT", VALID_CONFLICT_POLICIES
                    ),
                    file_rename.get("on_conflict"),
                    "skip",
                ),
            ),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
