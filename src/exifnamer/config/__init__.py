"""Configuration management for exifnamer.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (EXIFNAMER_*)
3. Config file (~/.exifnamer/config.toml)
4. Default values (lowest priority)
"""

from exifnamer.config.env import EnvReader
from exifnamer.config.loader import (
    ConfigError,
    get_config,
    get_default_config_path,
    load_config_file,
)
from exifnamer.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from exifnamer.config.models import (
    AppConfig,
    ExifToolConfig,
    LoggingConfig,
    RenameConfig,
)

__all__ = [
    # Models
    "AppConfig",
    "ExifToolConfig",
    "LoggingConfig",
    "RenameConfig",
    # Loader
    "ConfigError",
    "EnvReader",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Logging
    "build_logging_config",
    "configure_logging_from_cli",
]
