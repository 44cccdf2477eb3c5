"""Dockerfile reader for envquack.

Extracts ENV and ARG declarations and every ``$VAR`` / ``${VAR}`` reference
from a Dockerfile. Parsing happens in two independent passes:

1. A line pass that folds ``\\`` continuations into logical instructions and
   interprets ENV/ARG instructions. A malformed instruction is logged as a
   warning and skipped; the rest of the file is still parsed.
2. A reference pass over the whole raw content.
"""

import logging
import re
from collections.abc import Iterator
from pathlib import Path

from packages.ingest.readers.dotenv import strip_quotes
from packages.ingest.readers.errors import MalformedInstructionError, SourceReadError
from packages.schemas.env_drift import DockerfileInfo, VariableSet

logger = logging.getLogger(__name__)

ENV_INSTRUCTION_RE = re.compile(r"^ENV\s+(.+)$", re.IGNORECASE)
ARG_INSTRUCTION_RE = re.compile(r"^ARG\s+(.+)$", re.IGNORECASE)
VARIABLE_REF_RE = re.compile(r"\$\{?([A-Z_][A-Z0-9_]*)\}?")

# Shell and OS variables present in every build environment
SYSTEM_VARS = frozenset(
    {"PATH", "HOME", "USER", "SHELL", "TERM", "PWD", "OLDPWD", "HOSTNAME", "UID", "GID"}
)

# Values that look like fixed settings rather than configuration (compared lowercase)
OBVIOUS_CONSTANTS = frozenset(
    {
        "production",
        "development",
        "staging",
        "test",
        "true",
        "false",
        "0",
        "1",
        "utf8",
        "utf-8",
        "en_us",
        "c",
        "/app",
        "/usr/local/bin",
        "/bin",
        "/tmp",
    }
)


class DockerfileReader:
    """Dockerfile ENV/ARG reader."""

    def load_data(self, file_path: str | Path) -> DockerfileInfo:
        """Load and parse a Dockerfile.

        Args:
            file_path: Path to the Dockerfile.

        Returns:
            DockerfileInfo: ENV/ARG declarations and variable references.

        Raises:
            SourceReadError: If the file does not exist or cannot be read.
        """
        path = Path(file_path)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise SourceReadError(str(file_path), "File not found") from e
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(str(file_path), f"Cannot read Dockerfile ({e})") from e

        logger.info(f"Loading Dockerfile from {file_path}")
        return self.parse_text(content)

    def parse_text(self, content: str) -> DockerfileInfo:
        """Parse Dockerfile content already held in memory.

        Args:
            content: Raw Dockerfile text.

        Returns:
            DockerfileInfo: ENV/ARG declarations and variable references.
        """
        env_vars: VariableSet = {}
        arg_vars: VariableSet = {}

        for line_num, instruction in iter_logical_lines(content):
            try:
                parse_instruction(instruction, env_vars, arg_vars)
            except MalformedInstructionError as e:
                logger.warning(f"Line {line_num}: {e}")

        info = DockerfileInfo(
            env_vars=env_vars,
            arg_vars=arg_vars,
            variable_refs=extract_variable_references(content),
        )

        logger.info(
            f"Extracted {len(info.env_vars)} ENV, {len(info.arg_vars)} ARG, "
            f"{len(info.variable_refs)} variable references"
        )

        return info


def iter_logical_lines(content: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, instruction)`` pairs with continuations folded.

    The line number is that of the last physical line of the instruction.
    """
    pending: list[str] = []
    line_num = 0

    for line_num, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.strip()

        if not line or line.startswith("#"):
            continue

        if line.endswith("\\"):
            pending.append(line[:-1] + " ")
            continue

        if pending:
            line = "".join(pending) + line
            pending = []

        yield line_num, line

    # A continuation left open at end of file is still an instruction
    if pending:
        yield line_num, "".join(pending).strip()


def parse_instruction(line: str, env_vars: VariableSet, arg_vars: VariableSet) -> None:
    """Interpret one logical instruction, updating the ENV/ARG sets in place.

    Non ENV/ARG instructions are ignored.

    Raises:
        MalformedInstructionError: If an ENV or ARG instruction cannot be parsed.
    """
    line = line.strip()

    if match := ENV_INSTRUCTION_RE.match(line):
        parse_env_instruction(match.group(1).strip(), env_vars)
    elif match := ARG_INSTRUCTION_RE.match(line):
        parse_arg_instruction(match.group(1).strip(), arg_vars)


def parse_env_instruction(content: str, env_vars: VariableSet) -> None:
    """Parse the body of an ENV instruction.

    Supported forms:
        ENV KEY=value
        ENV KEY1=value1 KEY2="value 2"
        ENV KEY value with spaces   (legacy)
    """
    if "=" in content:
        parse_key_value_pairs(content, env_vars)
        return

    parts = content.split()
    if len(parts) < 2:
        raise MalformedInstructionError(f"invalid ENV instruction format: {content}")

    env_vars[parts[0]] = " ".join(parts[1:])


def parse_arg_instruction(content: str, arg_vars: VariableSet) -> None:
    """Parse the body of an ARG instruction (``NAME`` or ``NAME=default``)."""
    if "=" in content:
        parse_key_value_pairs(content, arg_vars)
        return

    parts = content.split()
    if len(parts) != 1:
        raise MalformedInstructionError(f"invalid ARG instruction format: {content}")

    arg_vars[parts[0]] = ""


def split_quoted(content: str) -> list[str]:
    """Split on whitespace outside of single or double quotes.

    Quotes are kept in the returned tokens.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote_char = ""

    for char in content:
        if char in ("'", '"'):
            if not quote_char:
                quote_char = char
            elif char == quote_char:
                quote_char = ""
            current.append(char)
        elif char.isspace() and not quote_char:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))

    return tokens


def parse_key_value_pairs(content: str, variables: VariableSet) -> None:
    """Parse ``KEY1=value1 KEY2="value 2"`` into ``variables``.

    Tokens without ``=`` and tokens with an empty key are ignored.
    """
    for token in split_quoted(content):
        key, sep, value = token.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key:
            continue
        variables[key] = strip_quotes(value.strip())


def extract_variable_references(content: str) -> list[str]:
    """Find ``$VAR`` and ``${VAR}`` references anywhere in the content.

    Returns:
        list[str]: Sorted, de-duplicated names without shell/system variables.
    """
    names = {name for name in VARIABLE_REF_RE.findall(content) if name not in SYSTEM_VARS}
    return sorted(names)


def is_obvious_constant(value: str) -> bool:
    """Check whether an ENV value looks like a fixed setting rather than config.

    Paths, URLs and values derived from other variables count as constants.
    """
    if value.lower() in OBVIOUS_CONSTANTS:
        return True

    return value.startswith("/") or "://" in value or value.startswith("${")
