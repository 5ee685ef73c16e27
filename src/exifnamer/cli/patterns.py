"""Pattern inspection commands: check and tokens."""

import json

import click

from exifnamer.cli.exit_codes import ExitCode
from exifnamer.cli.output import error_exit, json_option
from exifnamer.metadata.exceptions import CompileError
from exifnamer.metadata.templates import (
    TOKEN_DESCRIPTIONS,
    CompiledPattern,
    Token,
    compile_pattern,
)


def compile_or_exit(template: str | None, json_output: bool = False) -> CompiledPattern:
    """Compile a template for a command, exiting with PATTERN_ERROR on failure.

    Args:
        template: Template from the command line or configuration.
        json_output: Whether errors should be printed as JSON.

    Returns:
        The compiled pattern.
    """
    if not template:
        error_exit(
            "No pattern given. Use --pattern or set [rename] pattern in the "
            "config file.",
            ExitCode.PATTERN_ERROR,
            json_output,
        )
    try:
        return compile_pattern(template)
    except CompileError as e:
        error_exit(e.message, ExitCode.PATTERN_ERROR, json_output)


@click.command("check")
@click.argument("pattern")
@json_option
def check_command(pattern: str, json_output: bool) -> None:
    """Check a filename pattern and list the tokens it uses.

    Examples:

    \b
        exifnamer check "{y}{m}{D}_{t}_{T2}_{r}.{e}"
        exifnamer check "{Y}-{W}.{e}" --json
    """
    compiled = compile_or_exit(pattern, json_output)

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "completed",
                    "pattern": compiled.template,
                    "tokens": [token.value for token in compiled.tokens],
                    "uses_timestamp": compiled.uses_timestamp,
                },
                indent=2,
            )
        )
        return

    click.echo(f"Pattern OK: {compiled.template}")
    for token in compiled.tokens:
        click.echo(f"  {token.placeholder:<6} {TOKEN_DESCRIPTIONS[token]}")


@click.command("tokens")
def tokens_command() -> None:
    """List the tokens available in filename patterns."""
    for token in Token:
        click.echo(f"{token.placeholder:<6} {TOKEN_DESCRIPTIONS[token]}")
