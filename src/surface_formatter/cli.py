"""CLI entry point for surface-formatter."""

from pathlib import Path

import click
from rich.console import Console
from rich.syntax import Syntax

from surface_formatter import __version__
from surface_formatter.config.loader import load_config
from surface_formatter.exceptions import FileModifiedError, FormatterError
from surface_formatter.formatter import Formatter
from surface_formatter.models.config import FormatterConfig
from surface_formatter.services.file_operations import FormatResult, format_file, generate_unified_diff
from surface_formatter.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)
console = Console()

TEMPLATE_SUFFIX = ".sface"

EXIT_WOULD_REFORMAT = 1
EXIT_ERROR = 2

# Failures reported per input; the run continues with the next file
FORMAT_ERRORS = (FormatterError, FileModifiedError, OSError, UnicodeDecodeError, RecursionError)


def collect_files(paths: tuple[Path, ...]) -> list[Path]:
    """
    Expand command-line paths into template files.

    Directories are searched recursively for *.sface files; explicit file
    paths are kept whatever their suffix.

    Args:
        paths: Paths given on the command line

    Returns:
        Files in command-line order (directory contents sorted), without duplicates
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.rglob(f"*{TEMPLATE_SUFFIX}")))
        else:
            files.append(path)

    return list(dict.fromkeys(files))


def load_formatter_config(config_path: Path | None) -> FormatterConfig:
    """
    Load configuration for the CLI.

    Raises:
        click.ClickException: If the config file is missing or invalid
    """
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        logger.error("config_not_found", path=str(config_path))
        raise click.ClickException(str(e))
    except ValueError as e:
        logger.error("config_validation_error", error=str(e))
        raise click.ClickException(f"Configuration validation failed:\n{e}")


@click.command()
@click.version_option(version=__version__, prog_name="surface-format")
@click.argument("files", nargs=-1, type=click.Path(path_type=Path, allow_dash=True))
@click.option("--check", is_flag=True, help="Don't write files; exit with status 1 if any file would change")
@click.option("--diff", "show_diff", is_flag=True, help="Print a diff of the changes instead of writing files")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./.surface-formatter.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, files: tuple[Path, ...], check: bool, show_diff: bool, config_path: Path | None):
    """
    Format component templates.

    FILES may be template files or directories (searched for *.sface).
    With no FILES, or "-", the template is read from stdin and the formatted
    text is written to stdout.

    Examples:
        surface-format templates/                 # Format every template in place
        surface-format --check templates/         # Fail if anything is unformatted
        surface-format --diff card.sface          # Show what would change
        cat card.sface | surface-format           # Format stdin to stdout
    """
    configure_logging()
    logger.info("format_command_started", files=[str(f) for f in files], check=check, diff=show_diff)

    config = load_formatter_config(config_path)
    formatter = Formatter(config)

    if not files or files == (Path("-"),):
        ctx.exit(_format_stdin(formatter, check, show_diff))

    would_reformat = 0
    failed = 0

    for path in collect_files(files):
        try:
            result = format_file(path, formatter, check=check or show_diff)
        except FORMAT_ERRORS as e:
            logger.error("file_format_failed", path=str(path), error=str(e))
            click.echo(f"Error: {path}: {e}", err=True)
            failed += 1
            continue

        if not result.changed:
            continue

        if show_diff:
            _display_diff(result)
        if check or show_diff:
            would_reformat += 1
            click.echo(f"Would reformat {path}", err=True)
        else:
            click.echo(f"Reformatted {path}", err=True)

    logger.info("format_command_completed", would_reformat=would_reformat, failed=failed)

    if failed:
        ctx.exit(EXIT_ERROR)
    if check and would_reformat:
        ctx.exit(EXIT_WOULD_REFORMAT)


def _format_stdin(formatter: Formatter, check: bool, show_diff: bool) -> int:
    """Format stdin to stdout and return the exit code."""
    try:
        source = click.get_text_stream("stdin").read()
        formatted = formatter.format_string(source) + "\n"
    except FORMAT_ERRORS as e:
        logger.error("stdin_format_failed", error=str(e))
        click.echo(f"Error: <stdin>: {e}", err=True)
        return EXIT_ERROR

    result = FormatResult(path=Path("<stdin>"), original=source, formatted=formatted)

    if show_diff:
        _display_diff(result)
    elif not check:
        click.echo(formatted, nl=False)

    if check and result.changed:
        return EXIT_WOULD_REFORMAT
    return 0


def _display_diff(result: FormatResult) -> None:
    """Print a syntax-highlighted unified diff for one file."""
    diff = generate_unified_diff(
        result.original,
        result.formatted,
        fromfile=f"{result.path} (original)",
        tofile=f"{result.path} (formatted)",
    )
    console.print(Syntax(diff, "diff", theme="ansi_dark", background_color="default"))


def main():
    """Main entry point for setuptools console script."""
    cli()


if __name__ == "__main__":
    main()
