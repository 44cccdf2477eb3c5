"""Audit command for envquack CLI.

Runs every check in sequence:
1. env file vs example file
2. docker-compose requirements vs env file
3. Dockerfile requirements vs env file

A missing source is reported and skipped. A source that fails to parse is
reported as an error; the remaining checks still run. The audit exits with
code 1 if any check found issues or failed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from textwrap import indent

import typer
from rich.console import Console
from rich.markup import escape

from apps.cli.envquack_cli.quack import get_angry_duck, get_banner, get_happy_duck
from apps.cli.envquack_cli.report import (
    ReportOptions,
    render_compose_report,
    render_dockerfile_report,
    render_env_report,
)
from packages.core.use_cases.compare_compose import CompareComposeUseCase
from packages.core.use_cases.compare_dockerfile import CompareDockerfileUseCase
from packages.core.use_cases.compare_env_files import CompareEnvFilesUseCase
from packages.ingest.readers.errors import ReaderError

console = Console()
logger = logging.getLogger(__name__)


def _print_nested(report: str) -> None:
    console.print(indent(report, "  "), end="", highlight=False, soft_wrap=True)


def _audit_env_files(env_file: str, example_file: str, options: ReportOptions) -> bool:
    """Run the env vs example check. Returns True if it failed."""
    console.print("📋 Checking .env vs .env.example:")

    if not Path(example_file).is_file():
        console.print(f"  ℹ️  No {escape(example_file)} found, skipping env check\n", highlight=False)
        return False
    if not Path(env_file).is_file():
        console.print(f"  ℹ️  No {escape(env_file)} found, skipping env check\n", highlight=False)
        return False

    try:
        result = CompareEnvFilesUseCase().execute(env_file, example_file)
    except ReaderError as e:
        console.print(f"  [red]❌ Error: {escape(str(e))}[/red]\n")
        logger.error("Env check failed: %s", e)
        return True

    if not result.has_issues():
        console.print("  [green]✅ Basic env check passed[/green]\n")
        return False

    nested = options.model_copy(update={"show_duck": False, "verbose": False})
    _print_nested(render_env_report(result, nested))
    console.print()
    return True


def _audit_compose(compose_file: str, env_files: list[str], options: ReportOptions) -> bool:
    """Run the compose check. Returns True if it failed."""
    console.print("🐳 Checking docker-compose environment requirements:")

    if not Path(compose_file).is_file():
        console.print(
            f"  ℹ️  No {escape(compose_file)} found, skipping compose check\n", highlight=False
        )
        return False

    try:
        result = CompareComposeUseCase().execute(compose_file, env_files)
    except ReaderError as e:
        console.print(f"  [red]❌ Error parsing compose file: {escape(str(e))}[/red]\n")
        logger.error("Compose check failed: %s", e)
        return True

    if not result.has_issues():
        console.print("  [green]✅ Docker Compose check passed[/green]\n")
        return False

    _print_nested(render_compose_report(result, options.model_copy(update={"show_duck": False})))
    console.print()
    return True


def _audit_dockerfile(dockerfile: str, env_files: list[str], options: ReportOptions) -> bool:
    """Run the Dockerfile check. Returns True if it failed."""
    console.print("📦 Checking Dockerfile environment requirements:")

    if not Path(dockerfile).is_file():
        console.print(
            f"  ℹ️  No {escape(dockerfile)} found, skipping Dockerfile check\n", highlight=False
        )
        return False

    try:
        result = CompareDockerfileUseCase().execute(dockerfile, env_files)
    except ReaderError as e:
        console.print(f"  [red]❌ Error parsing Dockerfile: {escape(str(e))}[/red]\n")
        logger.error("Dockerfile check failed: %s", e)
        return True

    if not result.has_issues():
        console.print("  [green]✅ Dockerfile check passed[/green]\n")
        return False

    _print_nested(
        render_dockerfile_report(result, options.model_copy(update={"show_duck": False}))
    )
    console.print()
    return True


def audit_command(
    env_file: str,
    example_file: str,
    compose_file: str,
    dockerfile: str,
    options: ReportOptions,
) -> None:
    """Audit env files against the example, compose file and Dockerfile.

    Args:
        env_file: Path to the .env file.
        example_file: Path to the .env.example file.
        compose_file: Path to the docker-compose file.
        dockerfile: Path to the Dockerfile.
        options: Report formatting options.

    Raises:
        typer.Exit: Exit with code 1 if any check found issues or failed.
    """
    console.no_color = not options.colorize

    if options.show_duck:
        console.print(escape(get_banner()), highlight=False)
    console.print("🔍 Running comprehensive environment audit...\n")

    env_files = [env_file] if Path(env_file).is_file() else []

    # Every check runs even when an earlier one failed
    results = [
        _audit_env_files(env_file, example_file, options),
        _audit_compose(compose_file, env_files, options),
        _audit_dockerfile(dockerfile, env_files, options),
    ]
    has_errors = any(results)

    if options.show_duck:
        if has_errors:
            console.print(escape(get_angry_duck()), highlight=False)
            console.print("[red]QUACK! 🦆 Audit found issues that need attention![/red]")
        else:
            console.print(escape(get_happy_duck()), highlight=False)
            console.print("[green]✅ Audit passed! Your environment is well organized.[/green]")
    elif has_errors:
        console.print("[red]❌ Audit found issues that need attention![/red]")
    else:
        console.print("[green]✅ Audit passed! Your environment is well organized.[/green]")

    if has_errors:
        raise typer.Exit(1)


__all__ = ["audit_command"]
