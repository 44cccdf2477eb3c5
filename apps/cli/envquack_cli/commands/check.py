"""Check command for envquack CLI.

Compares the env file against the example file and prints the report. Exits
with code 1 when the files disagree or cannot be read, so the command can
guard pre-commit hooks and CI jobs.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from apps.cli.envquack_cli.report import ReportOptions, render_env_report
from packages.core.use_cases.compare_env_files import CompareEnvFilesUseCase
from packages.ingest.readers.errors import ReaderError

console = Console()
logger = logging.getLogger(__name__)


def check_command(env_file: str, example_file: str, options: ReportOptions) -> None:
    """Compare ``env_file`` against ``example_file``.

    Args:
        env_file: Path to the .env file.
        example_file: Path to the .env.example file.
        options: Report formatting options.

    Raises:
        typer.Exit: Exit with code 1 if a file is missing or issues were found.
    """
    console.no_color = not options.colorize

    for label, path in (("Example", example_file), ("Env", env_file)):
        if not Path(path).is_file():
            console.print(f"[red]✗ {label} file error: file {escape(path)} does not exist[/red]")
            raise typer.Exit(1)

    try:
        result = CompareEnvFilesUseCase().execute(env_file, example_file)
    except ReaderError as e:
        console.print(f"[red]✗ Failed to compare files: {escape(str(e))}[/red]")
        logger.exception("Env comparison failed for %s", env_file)
        raise typer.Exit(1) from None

    console.print(
        render_env_report(result, options), end="", highlight=False, soft_wrap=True
    )

    if options.verbose:
        console.print(f"Summary: {result.summary()}", highlight=False)

    if result.has_issues():
        raise typer.Exit(1)


__all__ = ["check_command"]
