"""Report rendering for envquack diff results.

Each ``render_*`` function returns the report as Rich markup text. With
``colorize`` off the headings are plain and no markup styling is added; names
and paths are always escaped so they print verbatim.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from rich.markup import escape

from apps.cli.envquack_cli.quack import get_angry_duck
from packages.schemas.env_drift import ComposeDiffResult, DockerfileDiffResult, EnvDiffResult


class ReportOptions(BaseModel):
    """Formatting options passed explicitly to every render call.

    Attributes:
        show_duck: Print duck art and duck messages.
        colorize: Use colored emoji headings instead of plain ones.
        verbose: Include informational sections.
    """

    model_config = ConfigDict(frozen=True)

    show_duck: bool = True
    colorize: bool = True
    verbose: bool = False


def _section(
    lines: list[str],
    opts: ReportOptions,
    colored_heading: str,
    plain_heading: str,
    items: list[str],
    style: str,
) -> None:
    if opts.colorize:
        lines.append(f"[{style}]{colored_heading}[/{style}]")
    else:
        lines.append(plain_heading)
    lines.extend(f"  - {escape(item)}" for item in items)
    lines.append("")


def _header(lines: list[str], opts: ReportOptions, title: str) -> None:
    if opts.show_duck:
        lines.append(escape(get_angry_duck()))
        lines.append(f"QUACK! 🦆 {title}")
        lines.append("")


def _success(message: str, duck_message: str, opts: ReportOptions) -> str:
    text = f"[green]{message}[/green]" if opts.colorize else message
    if opts.show_duck:
        text += f"\n{duck_message}"
    return text + "\n"


def render_env_report(result: EnvDiffResult, opts: ReportOptions | None = None) -> str:
    """Render an env vs example comparison."""
    opts = opts or ReportOptions()

    if not result.has_issues():
        return _success("✅ All envs aligned.", "(Your duck is calm and happy.)", opts)

    lines: list[str] = []
    _header(lines, opts, "Environment issues detected:")

    if result.missing:
        _section(
            lines,
            opts,
            "🔴 Missing variables (present in .env.example but not in .env):",
            "Missing variables:",
            result.missing,
            "red",
        )
    if result.extra:
        _section(
            lines,
            opts,
            "🟡 Extra variables (present in .env but not in .env.example):",
            "Extra variables:",
            result.extra,
            "yellow",
        )

    if opts.show_duck:
        lines.append("(Your duck is angry. Fix your .env!)")

    return "\n".join(lines) + "\n"


def render_compose_report(result: ComposeDiffResult, opts: ReportOptions | None = None) -> str:
    """Render a compose vs env comparison.

    The per-service breakdown is only shown in verbose mode.
    """
    opts = opts or ReportOptions()

    if not result.has_issues():
        return _success(
            "✅ Docker Compose environment is aligned.",
            "(Your duck approves of your container setup!)",
            opts,
        )

    lines: list[str] = []
    _header(lines, opts, "Docker Compose environment issues detected:")

    if result.missing_env_files:
        _section(
            lines,
            opts,
            "💥 Missing env_files referenced in compose:",
            "Missing env_files:",
            result.missing_env_files,
            "red",
        )
    if result.missing_in_env:
        _section(
            lines,
            opts,
            "🔴 Variables required by compose but missing in env files:",
            "Missing variables:",
            result.missing_in_env,
            "red",
        )
    if result.service_breakdown and opts.verbose:
        lines.append("📋 Service breakdown:" if opts.colorize else "Service breakdown:")
        for service_name, missing in result.service_breakdown.items():
            lines.append(f"  {escape(service_name)}:")
            lines.extend(f"    - {escape(name)}" for name in missing)
        lines.append("")
    if result.extra_in_env:
        _section(
            lines,
            opts,
            "🟡 Variables in env files but not used in compose:",
            "Unused variables:",
            result.extra_in_env,
            "yellow",
        )

    if opts.show_duck:
        lines.append("(Your duck is confused by your container setup!)")

    return "\n".join(lines) + "\n"


def render_dockerfile_report(
    result: DockerfileDiffResult, opts: ReportOptions | None = None
) -> str:
    """Render a Dockerfile vs env comparison.

    Hardcoded ENV values and ARGs without defaults are only shown in verbose
    mode.
    """
    opts = opts or ReportOptions()

    if not result.has_issues():
        return _success(
            "✅ Dockerfile environment is aligned.",
            "(Your duck approves of your containerized setup!)",
            opts,
        )

    lines: list[str] = []
    _header(lines, opts, "Dockerfile environment issues detected:")

    if result.missing_in_env:
        _section(
            lines,
            opts,
            "🔴 Variables required by Dockerfile but missing in env files:",
            "Missing variables:",
            result.missing_in_env,
            "red",
        )
    if result.unused_args:
        _section(
            lines,
            opts,
            "🟠 ARG variables declared but never used:",
            "Unused ARG variables:",
            result.unused_args,
            "dark_orange",
        )
    if result.hardcoded_envs and opts.verbose:
        _section(
            lines,
            opts,
            "🟡 ENV variables with hardcoded values (consider making configurable):",
            "Hardcoded ENV variables:",
            result.hardcoded_envs,
            "yellow",
        )
    if result.missing_arg_defaults and opts.verbose:
        _section(
            lines,
            opts,
            "⚠️  ARG variables without default values:",
            "ARG variables without defaults:",
            result.missing_arg_defaults,
            "yellow",
        )
    if result.extra_in_env:
        _section(
            lines,
            opts,
            "🔵 Variables in env files but not used in Dockerfile:",
            "Unused variables:",
            result.extra_in_env,
            "blue",
        )

    if opts.show_duck:
        lines.append("(Your duck is confused by your Dockerfile setup!)")

    return "\n".join(lines) + "\n"


__all__ = [
    "ReportOptions",
    "render_compose_report",
    "render_dockerfile_report",
    "render_env_report",
]
