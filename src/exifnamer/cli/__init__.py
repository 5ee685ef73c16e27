"""CLI module for exifnamer."""

import logging
from pathlib import Path

import click

from exifnamer.cli.exit_codes import ExitCode
from exifnamer.cli.output import error_exit
from exifnamer.config import AppConfig, ConfigError, get_config

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    config: AppConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from config and CLI options (once per process).

    Args:
        config: Loaded configuration.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from exifnamer.config.logging_factory import configure_logging_from_cli

    configure_logging_from_cli(
        config.logging,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    _logging_configured = True


def get_app_config(ctx: click.Context) -> AppConfig:
    """Return the configuration loaded by the main group."""
    return ctx.find_root().obj["config"]


@click.group()
@click.version_option(package_name="exifnamer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.exifnamer/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Rename media files using exiftool metadata and a filename template."""
    ctx.ensure_object(dict)

    # Preserve a config passed in by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path, strict=config_path is not None)
        except ConfigError as e:
            error_exit(e.message, ExitCode.CONFIG_ERROR)

    _configure_logging(ctx.obj["config"], log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from exifnamer.cli.patterns import check_command, tokens_command
    from exifnamer.cli.render import render_command
    from exifnamer.cli.rename import rename_command

    main.add_command(check_command)
    main.add_command(render_command)
    main.add_command(rename_command)
    main.add_command(tokens_command)


_register_commands()
