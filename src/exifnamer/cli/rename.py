"""Rename command: rename media files from their metadata."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from exifnamer.cli import get_app_config
from exifnamer.cli.exit_codes import ExitCode
from exifnamer.cli.output import error_exit, json_option
from exifnamer.cli.patterns import compile_or_exit
from exifnamer.executor.rename import ConflictPolicy, RenameExecutor
from exifnamer.introspector.exiftool import ExifToolError, ExifToolRunner
from exifnamer.logging import file_context
from exifnamer.metadata.exceptions import RenderError
from exifnamer.metadata.record import (
    MetadataRecord,
    load_metadata_dump,
    parse_metadata_dump,
)
from exifnamer.metadata.templates import CompiledPattern, RenderContext

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """Outcome of processing one file."""

    source: Path
    status: str  # renamed, unchanged, planned, failed
    destination: Path | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "source": str(self.source),
            "destination": str(self.destination) if self.destination else None,
            "status": self.status,
            "error": self.error,
        }


def _load_record(
    path: Path, exif_path: Path | None, runner: ExifToolRunner | None
) -> MetadataRecord:
    if exif_path is not None:
        return load_metadata_dump(exif_path)
    assert runner is not None
    return parse_metadata_dump(runner.read_dump(path))


def _process_file(
    path: Path,
    compiled: CompiledPattern,
    exif_path: Path | None,
    runner: ExifToolRunner | None,
    executor: RenameExecutor,
    dry_run: bool,
    claimed: set[Path],
) -> FileOutcome:
    if not path.is_file():
        return FileOutcome(path, "failed", error=f"File not found: {path}")

    try:
        record = _load_record(path, exif_path, runner)
    except OSError as e:
        return FileOutcome(path, "failed", error=f"Cannot read metadata dump: {e}")
    except ExifToolError as e:
        return FileOutcome(path, "failed", error=e.message)

    try:
        new_name = compiled.render(RenderContext(record, path.name))
    except RenderError as e:
        logger.warning("Skipping file: %s", e.message)
        return FileOutcome(path, "failed", error=e.message)

    plan = executor.create_plan(path, new_name, claimed)

    if dry_run:
        preview = executor.dry_run(plan, claimed)
        if not preview["valid"]:
            return FileOutcome(
                path,
                "failed",
                destination=plan.destination_path,
                error="; ".join(preview["errors"]),
            )
        claimed.add(plan.destination_path)
        status = "unchanged" if preview["unchanged"] else "planned"
        return FileOutcome(path, status, destination=plan.destination_path)

    result = executor.execute(plan)
    if not result.success:
        return FileOutcome(
            path,
            "failed",
            destination=plan.destination_path,
            error=result.error_message,
        )
    status = "unchanged" if result.unchanged else "renamed"
    return FileOutcome(path, status, destination=result.destination_path)


@click.command("rename")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path),
)
@click.option(
    "--pattern",
    "-p",
    default=None,
    help="Filename pattern (default: [rename] pattern from config).",
)
@click.option(
    "--exif",
    "-e",
    "exif_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Use a pre-generated exiftool dump instead of running exiftool "
    "(single file only).",
)
@click.option(
    "--on-conflict",
    type=click.Choice([p.value for p in ConflictPolicy], case_sensitive=False),
    default=None,
    help="What to do when the new name already exists (default: skip).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be renamed without renaming.",
)
@json_option
@click.pass_context
def rename_command(
    ctx: click.Context,
    files: tuple[Path, ...],
    pattern: str | None,
    exif_path: Path | None,
    on_conflict: str | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Rename FILES using their metadata and a filename pattern.

    Each file is handled on its own: a file whose metadata is missing or
    malformed is reported and skipped, and the rest are still renamed.

    Examples:

    \b
        exifnamer rename -p "{Y}{m}{D}_{t}_{r}.{e}" *.JPG
        exifnamer rename -p "{y}{m}{D}_{T2}_{r}.{e}" -e dump.txt IMG_1234.JPG
        exifnamer rename -p "{Y}-W{W}_{f}{r}.{e}" --dry-run *.NEF
    """
    config = get_app_config(ctx)
    compiled = compile_or_exit(pattern or config.rename.pattern, json_output)

    if exif_path is not None and len(files) > 1:
        error_exit(
            "--exif can only be used with a single file",
            ExitCode.GENERAL_ERROR,
            json_output,
        )

    if not any(path.is_file() for path in files):
        error_exit(
            "None of the given files exist", ExitCode.TARGET_NOT_FOUND, json_output
        )

    policy = ConflictPolicy((on_conflict or config.rename.on_conflict).lower())
    executor = RenameExecutor(on_conflict=policy)
    runner = None
    if exif_path is None:
        try:
            runner = ExifToolRunner(
                config.exiftool.path, timeout=config.exiftool.timeout_seconds
            )
        except ExifToolError as e:
            error_exit(e.message, ExitCode.TOOL_NOT_AVAILABLE, json_output)

    outcomes: list[FileOutcome] = []
    # Destinations a dry run has already handed out
    claimed: set[Path] = set()
    try:
        for path in files:
            with file_context(path):
                outcome = _process_file(
                    path, compiled, exif_path, runner, executor, dry_run, claimed
                )
            outcomes.append(outcome)

            if not json_output:
                _echo_outcome(outcome)
    except KeyboardInterrupt:
        error_exit(
            f"Interrupted after {len(outcomes)} of {len(files)} files",
            ExitCode.INTERRUPTED,
            json_output,
        )

    failed = [o for o in outcomes if o.status == "failed"]

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed" if failed else "completed",
                    "dry_run": dry_run,
                    "files": [o.to_dict() for o in outcomes],
                },
                indent=2,
            )
        )

    if failed:
        logger.info("%d of %d files failed", len(failed), len(outcomes))
        ctx.exit(int(ExitCode.RENAME_FAILED))


def _echo_outcome(outcome: FileOutcome) -> None:
    if outcome.status == "failed":
        click.echo(f"Error: {outcome.source}: {outcome.error}", err=True)
    elif outcome.status == "unchanged":
        click.echo(f"{outcome.source} (unchanged)")
    elif outcome.status == "planned":
        click.echo(f"{outcome.source} -> {outcome.destination} (dry run)")
    else:
        click.echo(f"{outcome.source} -> {outcome.destination}")
