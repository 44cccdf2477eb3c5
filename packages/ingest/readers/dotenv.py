"""Dotenv reader for envquack.

Parses line-oriented ``KEY=VALUE`` files into a VariableSet. The grammar is
permissive: malformed lines are skipped instead of aborting the read, since
dotenv files are hand-written and often partially filled in.
"""

import logging
from pathlib import Path

from packages.ingest.readers.errors import SourceReadError
from packages.schemas.env_drift import VariableSet

logger = logging.getLogger(__name__)


def strip_quotes(value: str) -> str:
    """Remove exactly one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


class DotenvReader:
    """Reader for ``.env`` style files."""

    def load_data(self, file_path: str | Path) -> VariableSet:
        """Load and parse a dotenv file.

        Args:
            file_path: Path to the dotenv file.

        Returns:
            VariableSet: Variable names mapped to their literal values.

        Raises:
            SourceReadError: If the file does not exist or cannot be read.
        """
        path = Path(file_path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise SourceReadError(str(file_path), "File not found") from e
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(str(file_path), f"Cannot read file ({e})") from e

        variables = self.parse_text(text)
        logger.debug(f"Parsed {len(variables)} variables from {file_path}")
        return variables

    def parse_text(self, text: str) -> VariableSet:
        """Parse dotenv content already held in memory.

        Args:
            text: Raw dotenv content.

        Returns:
            VariableSet: Variable names mapped to their literal values.
        """
        variables: VariableSet = {}

        for raw_line in text.splitlines():
            line = raw_line.strip()

            if not line or line.startswith("#"):
                continue

            # Values may contain '=', only the first one separates the key
            key, sep, value = line.partition("=")
            if not sep:
                continue

            key = key.strip()
            if not key:
                continue

            variables[key] = strip_quotes(value.strip())

        return variables


__all__ = ["DotenvReader", "strip_quotes"]
