"""Sync command for envquack CLI.

Appends every key of the example file that the env file lacks as an empty
``KEY=`` line. The env file is created when absent. Sync is best-effort: it
reports problems but always exits with code 0.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from apps.cli.envquack_cli.quack import get_sync_message
from packages.core.use_cases.compare_env_files import compare_env_vars
from packages.ingest.readers.dotenv import DotenvReader
from packages.ingest.readers.errors import SourceReadError

console = Console()
logger = logging.getLogger(__name__)

SYNC_SEPARATOR = "# Added by envquack sync"


def format_sync_block(missing: list[str], existing_content: str) -> str:
    """Build the text appended to the env file.

    Args:
        missing: Keys to add, in the order they should be written.
        existing_content: Current content of the env file ("" if new).

    Returns:
        str: One ``KEY=`` line per key, preceded by a separator comment when
            the file already had content.
    """
    block = ""
    if existing_content.strip():
        if not existing_content.endswith("\n"):
            block += "\n"
        block += f"\n{SYNC_SEPARATOR}\n"
    block += "".join(f"{key}=\n" for key in missing)
    return block


def sync_command(env_file: str, example_file: str, show_duck: bool = True) -> None:
    """Add keys missing from ``env_file`` with empty values.

    Args:
        env_file: Path to the .env file (created if absent).
        example_file: Path to the .env.example file.
        show_duck: Print duck art and duck messages.
    """
    reader = DotenvReader()

    try:
        example = reader.load_data(example_file)
    except SourceReadError as e:
        console.print(f"[red]✗ Example file error: {escape(str(e))}[/red]")
        return

    env_path = Path(env_file)
    try:
        raw_content = env_path.read_bytes()
    except FileNotFoundError:
        raw_content = b""
        console.print(f"Creating new {escape(env_file)} file...", highlight=False)
    except OSError as e:
        console.print(f"[red]✗ Env file error: {escape(str(e))}[/red]")
        logger.exception("Cannot read %s", env_file)
        return

    try:
        existing_content = raw_content.decode("utf-8")
    except UnicodeDecodeError:
        # Keys and line endings survive replacement; the file itself is only appended to
        logger.warning("%s is not valid UTF-8, invalid bytes are replaced", env_file)
        existing_content = raw_content.decode("utf-8", errors="replace")

    result = compare_env_vars(reader.parse_text(existing_content), example)

    if not result.missing:
        console.print("[green]✅ No missing variables to sync.[/green]")
        if show_duck:
            console.print("(Your duck is already happy!)")
        return

    if show_duck:
        console.print(escape(get_sync_message()), highlight=False)
    console.print(
        f"Adding {len(result.missing)} missing variables to {escape(env_file)}:",
        highlight=False,
    )

    try:
        with env_path.open("a", encoding="utf-8") as f:
            f.write(format_sync_block(result.missing, existing_content))
    except OSError as e:
        console.print(f"[red]✗ Failed to write {escape(env_file)}: {escape(str(e))}[/red]")
        logger.exception("Sync failed for %s", env_file)
        return

    for key in result.missing:
        console.print(f"  + {escape(key)}", highlight=False)

    console.print(f"\n[green]✅ Successfully synced {len(result.missing)} variables![/green]")
    console.print("Don't forget to set the actual values in your .env file.")


__all__ = ["SYNC_SEPARATOR", "format_sync_block", "sync_command"]
