"""envquack CLI - Typer command-line interface for environment drift checks."""

from __future__ import annotations

import logging

import typer

from apps.cli.envquack_cli.report import ReportOptions
from packages.common.config import get_config
from packages.common.logging import setup_logging

app = typer.Typer(
    name="envquack",
    help="envquack - Environment Variable Drift Detective. "
    "Keeps .env, .env.example, docker-compose and Dockerfile in sync.",
    add_completion=False,
)
logger = logging.getLogger(__name__)

ENV_HELP = "Path to .env file (default: .env)"
EXAMPLE_HELP = "Path to .env.example file (default: .env.example)"


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Configure logging before any command runs."""
    setup_logging(log_level)


@app.command()
def check(
    env_file: str | None = typer.Option(None, "--env", help=ENV_HELP),
    example_file: str | None = typer.Option(None, "--example", help=EXAMPLE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    no_duck: bool = typer.Option(False, "--no-duck", help="Disable ASCII duck art"),
) -> None:
    """
    Check for differences between .env and .env.example.

    Reports missing variables (in the example but not in .env) and extra
    variables (in .env but not in the example). Exits with code 1 when any
    are found.

    Examples:
        envquack check
        envquack check --env .env.local --example .env.example --no-duck
    """
    from apps.cli.envquack_cli.commands.check import check_command

    config = get_config()
    check_command(
        env_file=env_file or config.env_file,
        example_file=example_file or config.example_file,
        options=ReportOptions(
            show_duck=config.show_duck and not no_duck,
            colorize=config.colorize and not no_color,
            verbose=verbose,
        ),
    )


@app.command()
def sync(
    env_file: str | None = typer.Option(None, "--env", help=ENV_HELP),
    example_file: str | None = typer.Option(None, "--example", help=EXAMPLE_HELP),
    no_duck: bool = typer.Option(False, "--no-duck", help="Disable ASCII duck art"),
) -> None:
    """
    Sync missing variables from .env.example to .env.

    Missing keys are appended with empty values; .env is created if absent.

    Examples:
        envquack sync
        envquack sync --env .env.local
    """
    from apps.cli.envquack_cli.commands.sync import sync_command

    config = get_config()
    sync_command(
        env_file=env_file or config.env_file,
        example_file=example_file or config.example_file,
        show_duck=config.show_duck and not no_duck,
    )


@app.command()
def audit(
    env_file: str | None = typer.Option(None, "--env", help=ENV_HELP),
    example_file: str | None = typer.Option(None, "--example", help=EXAMPLE_HELP),
    compose_file: str | None = typer.Option(
        None, "--compose", help="Path to docker-compose file (default: docker-compose.yml)"
    ),
    dockerfile: str | None = typer.Option(
        None, "--dockerfile", help="Path to Dockerfile (default: Dockerfile)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    no_duck: bool = typer.Option(False, "--no-duck", help="Disable ASCII duck art"),
) -> None:
    """
    Comprehensive audit of env files vs example, docker-compose and Dockerfile.

    Checks:
        1. .env against .env.example
        2. docker-compose environment requirements and env_file references
        3. Dockerfile ENV/ARG requirements

    Examples:
        envquack audit
        envquack audit --compose compose.yaml --dockerfile docker/Dockerfile -v
    """
    from apps.cli.envquack_cli.commands.audit import audit_command

    config = get_config()
    audit_command(
        env_file=env_file or config.env_file,
        example_file=example_file or config.example_file,
        compose_file=compose_file or config.compose_file,
        dockerfile=dockerfile or config.dockerfile,
        options=ReportOptions(
            show_duck=config.show_duck and not no_duck,
            colorize=config.colorize and not no_color,
            verbose=verbose,
        ),
    )


if __name__ == "__main__":
    app()
