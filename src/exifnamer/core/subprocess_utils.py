"""Running external tools.

Every exiftool call goes through run_command() so timeouts, decoding and
logging behave the same way everywhere.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for exiftool invocation
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished command."""

    stdout: str
    stderr: str
    returncode: int
    elapsed_seconds: float

    @property
    def ok(self) -> bool:
        """True if the command exited with status 0."""
        return self.returncode == 0


def _describe(args: list[str], limit: int = 3) -> str:
    shown = " ".join(args[:limit])
    return shown + " ..." if len(args) > limit else shown


def run_command(
    args: list[str | Path],
    timeout: int = 30,
    errors: str = "replace",
    **kwargs: Any,
) -> CommandResult:
    """Run a command and capture its output as UTF-8 text.

    Args:
        args: Command and arguments; Path objects are converted to strings.
        timeout: Seconds before the command is killed.
        errors: Decoding error handler for the output streams.
        **kwargs: Passed through to subprocess.run().

    Returns:
        CommandResult. A non-zero exit status is not an error here.

    Raises:
        subprocess.TimeoutExpired: The command ran past ``timeout`` (the
            child has already been killed).
        OSError: The executable could not be started.
    """
    str_args = [str(arg) for arg in args]
    command_name = Path(str_args[0]).name if str_args else "unknown"
    logger.debug("Running %s", _describe(str_args), extra={"command": command_name})

    start = time.monotonic()
    try:
        completed = subprocess.run(  # nosec B603 - args come from the caller
            str_args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors=errors,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "%s timed out after %ds",
            _describe(str_args),
            timeout,
            extra={"command": command_name, "timeout_seconds": timeout},
        )
        raise

    result = CommandResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        returncode=completed.returncode,
        elapsed_seconds=round(time.monotonic() - start, 3),
    )
    logger.debug(
        "%s exited with %d",
        command_name,
        result.returncode,
        extra={"command": command_name, "elapsed_seconds": result.elapsed_seconds},
    )
    return result
