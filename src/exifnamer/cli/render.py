"""Render command: print the filename a pattern produces for a metadata dump."""

import logging
from pathlib import Path

import click

from exifnamer.cli import get_app_config
from exifnamer.cli.exit_codes import ExitCode
from exifnamer.cli.output import error_exit
from exifnamer.cli.patterns import compile_or_exit
from exifnamer.metadata.exceptions import RenderError
from exifnamer.metadata.record import load_metadata_dump
from exifnamer.metadata.templates import RenderContext

logger = logging.getLogger(__name__)


@click.command("render")
@click.option(
    "--exif",
    "-e",
    "exif_path",
    type=click.Path(path_type=Path, dir_okay=False),
    required=True,
    help="Metadata dump produced by exiftool.",
)
@click.option(
    "--pattern",
    "-p",
    default=None,
    help="Filename pattern (default: [rename] pattern from config).",
)
@click.argument("filename", required=False, default="")
@click.pass_context
def render_command(
    ctx: click.Context,
    exif_path: Path,
    pattern: str | None,
    filename: str,
) -> None:
    """Print the new name for a file without renaming anything.

    FILENAME is the file's current name. It may be omitted when the dump
    contains a "File Name" tag.

    Examples:

    \b
        exiftool IMG_1234.JPG > IMG_1234.txt
        exifnamer render -e IMG_1234.txt -p "{y}{m}{D}_{t}_{r}.{e}"
    """
    config = get_app_config(ctx)
    compiled = compile_or_exit(pattern or config.rename.pattern)

    try:
        record = load_metadata_dump(exif_path)
    except OSError as e:
        error_exit(f"Cannot read metadata dump {exif_path}: {e}", ExitCode.DUMP_NOT_FOUND)

    try:
        new_name = compiled.render(RenderContext(record, filename))
    except RenderError as e:
        error_exit(e.message, ExitCode.METADATA_ERROR)

    logger.debug("Rendered %r for %s", new_name, filename or exif_path)
    click.echo(new_name)
