"""Docker Compose YAML reader for envquack.

Parses docker-compose.yaml files and extracts the environment configuration
they depend on:
1. Explicit ``environment`` entries, per service and merged
2. ``env_file`` references
3. ``${VAR}`` / ``$VAR`` interpolation references in the raw document

The ``environment`` and ``env_file`` keys accept several YAML shapes; they are
normalised here and never leave the reader in their raw form.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from packages.ingest.readers.errors import SourceFormatError, SourceReadError
from packages.schemas.env_drift import ComposeInfo, VariableSet

logger = logging.getLogger(__name__)

# Interpolation patterns; a "$$" escape is a literal dollar in compose files
VARIABLE_REF_PATTERNS = (
    re.compile(r"(?<!\$)\$\{([A-Z_][A-Z0-9_]*)\}"),  # ${VAR}
    re.compile(r"(?<!\$)\$\{([A-Z_][A-Z0-9_]*)(?::|[-?+])[^}]*\}"),  # ${VAR:-default}
    re.compile(r"(?<!\$)\$([A-Z_][A-Z0-9_]*)"),  # $VAR
)

# Host and compose runtime variables, not application configuration
COMPOSE_BUILTIN_VARS = frozenset(
    {
        "COMPOSE_PROJECT_NAME",
        "COMPOSE_FILE",
        "COMPOSE_PATH_SEPARATOR",
        "DOCKER_HOST",
        "DOCKER_TLS_VERIFY",
        "DOCKER_CERT_PATH",
        "HOSTNAME",
        "USER",
        "HOME",
        "PATH",
        "PWD",
    }
)


class ComposeLoader(yaml.SafeLoader):
    """SafeLoader that accepts compose local tags such as ``!reset`` and ``!override``."""


def _construct_tagged_node(loader: ComposeLoader, tag_suffix: str, node: yaml.Node) -> Any:
    # The tag only changes how compose merges files; the value is kept as is
    if isinstance(node, yaml.MappingNode):
        return loader.construct_mapping(node, deep=True)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node, deep=True)
    return loader.construct_scalar(node)


ComposeLoader.add_multi_constructor("!", _construct_tagged_node)


class DockerComposeError(SourceFormatError):
    """Base exception for DockerComposeReader format errors."""

    pass


class InvalidYAMLError(DockerComposeError):
    """Raised when YAML file is malformed."""

    pass


class DockerComposeReader:
    """Docker Compose YAML reader.

    Extracts environment variables, env_file references and interpolation
    references from a compose manifest.
    """

    def load_data(self, file_path: str | Path) -> ComposeInfo:
        """Load and parse a docker-compose.yaml file.

        Args:
            file_path: Path to docker-compose.yaml file.

        Returns:
            ComposeInfo: Environment information of the compose file.

        Raises:
            SourceReadError: If the file does not exist or cannot be read.
            InvalidYAMLError: If YAML is malformed.
        """
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise SourceReadError(str(file_path), "File not found") from e
        except OSError as e:
            raise SourceReadError(str(file_path), f"Cannot read compose file ({e})") from e

        logger.info(f"Loading docker-compose file from {file_path}")

        try:
            return self.parse_data(data)
        except InvalidYAMLError as e:
            raise InvalidYAMLError(f"{file_path}: {e}") from e

    def parse_data(self, data: bytes | str) -> ComposeInfo:
        """Parse compose YAML content.

        Args:
            data: Raw compose document.

        Returns:
            ComposeInfo: Environment information of the document.

        Raises:
            InvalidYAMLError: If the document cannot be decoded or its root or
                ``services`` value is not a mapping.
        """
        if isinstance(data, bytes):
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidYAMLError(f"Compose file is not valid UTF-8: {e}") from e
        else:
            text = data

        try:
            compose_data = yaml.load(text, Loader=ComposeLoader)
        except yaml.YAMLError as e:
            raise InvalidYAMLError(f"Invalid YAML: {e}") from e

        if compose_data is None:
            compose_data = {}
        if not isinstance(compose_data, dict):
            raise InvalidYAMLError("Invalid compose file structure: root must be a mapping")

        services_data = compose_data.get("services") or {}
        if not isinstance(services_data, dict):
            raise InvalidYAMLError("'services' must be a dictionary")

        variables: VariableSet = {}
        service_variables: dict[str, VariableSet] = {}
        env_files: list[str] = []

        for service_name, service_config in services_data.items():
            if not isinstance(service_config, dict):
                logger.warning(f"Skipping invalid service config for {service_name}")
                continue

            service_vars = parse_environment_section(service_config.get("environment"))
            variables.update(service_vars)
            if service_vars:
                service_variables[str(service_name)] = service_vars

            env_files.extend(parse_env_file_section(service_config.get("env_file")))

        info = ComposeInfo(
            variables=variables,
            service_variables=service_variables,
            env_file_refs=env_files,
            variable_refs=extract_variable_references(text),
        )

        logger.info(
            f"Extracted {len(info.variables)} environment variables from "
            f"{len(info.service_variables)} services, "
            f"{len(info.env_file_refs)} env files, "
            f"{len(info.variable_refs)} variable references"
        )

        return info


def parse_environment_section(environment: Any) -> VariableSet:
    """Normalise a service ``environment`` value into a VariableSet.

    Supports the list form (``["KEY=VALUE", "KEY"]``) and the mapping form
    (``{KEY: VALUE}``, null meaning empty). Other shapes yield an empty set.
    """
    variables: VariableSet = {}

    if isinstance(environment, list):
        for item in environment:
            if not isinstance(item, str):
                continue
            key, value = parse_env_string(item)
            if key:
                variables[key] = value
    elif isinstance(environment, dict):
        for key, value in environment.items():
            variables[str(key)] = _scalar_to_str(value)

    return variables


def parse_env_file_section(env_file: Any) -> list[str]:
    """Normalise a service ``env_file`` value into a list of paths."""
    if isinstance(env_file, str):
        return [env_file]

    files: list[str] = []
    if isinstance(env_file, list):
        for item in env_file:
            if isinstance(item, str):
                files.append(item)
            elif isinstance(item, dict) and isinstance(item.get("path"), str):
                # Long syntax: {path: ..., required: ...}
                files.append(item["path"])
    return files


def parse_env_string(entry: str) -> tuple[str, str]:
    """Split a ``KEY=VALUE`` or bare ``KEY`` list entry."""
    entry = entry.strip()
    if not entry:
        return "", ""

    key, sep, value = entry.partition("=")
    if not sep:
        return entry, ""
    return key.strip(), value.strip()


def extract_variable_references(content: str) -> list[str]:
    """Find ``${VAR}``, ``${VAR:-default}`` and ``$VAR`` references in raw text.

    Args:
        content: Raw compose document text.

    Returns:
        list[str]: Sorted, de-duplicated names without compose/host built-ins.
    """
    names: set[str] = set()
    for pattern in VARIABLE_REF_PATTERNS:
        for match in pattern.finditer(content):
            name = match.group(1)
            if name not in COMPOSE_BUILTIN_VARS:
                names.add(name)
    return sorted(names)


def _scalar_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
