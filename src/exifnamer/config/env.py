"""Typed reads of EXIFNAMER_* environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Collection, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class EnvReader:
    """Typed access to environment variables.

    Values are stripped, and empty values count as unset. Values that are
    set but unusable are logged and replaced by the default, so a typo in
    the environment never aborts a rename run.

    Pass ``env`` to read from a plain dict instead of os.environ:

        reader = EnvReader(env={"EXIFNAMER_EXIFTOOL_TIMEOUT": "60"})
        reader.get_int("EXIFNAMER_EXIFTOOL_TIMEOUT", 30)  # 60
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _raw(self, var: str) -> str | None:
        value = self._env.get(var, "").strip()
        return value or None

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Return the variable's value, or default when unset."""
        value = self._raw(var)
        return default if value is None else value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Return the variable parsed as an integer, or default."""
        value = self._raw(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_choice(
        self, var: str, choices: Collection[str], default: str | None = None
    ) -> str | None:
        """Return the lowercased value if it is one of choices, else default."""
        value = self._raw(var)
        if value is None:
            return default
        if value.lower() not in choices:
            logger.warning(
                "Ignoring %s=%s (expected one of %s)",
                var,
                value,
                ", ".join(sorted(choices)),
            )
            return default
        return value.lower()

    def get_path(
        self, var: str, must_exist: bool = True, default: Path | None = None
    ) -> Path | None:
        """Return the variable as a Path with ``~`` expanded, or default.

        Args:
            var: Environment variable name.
            must_exist: Ignore, with a warning, paths that do not exist.
            default: Value returned when unset or ignored.
        """
        value = self._raw(var)
        if value is None:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
            return default
        return path
