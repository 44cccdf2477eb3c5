"""Readers for the configuration sources envquack compares."""

from packages.ingest.readers.docker_compose import (
    DockerComposeError,
    DockerComposeReader,
    InvalidYAMLError,
)
from packages.ingest.readers.dockerfile import DockerfileReader, is_obvious_constant
from packages.ingest.readers.dotenv import DotenvReader
from packages.ingest.readers.errors import (
    MalformedInstructionError,
    ReaderError,
    SourceFormatError,
    SourceReadError,
)

__all__ = [
    "DockerComposeError",
    "DockerComposeReader",
    "DockerfileReader",
    "DotenvReader",
    "InvalidYAMLError",
    "MalformedInstructionError",
    "ReaderError",
    "SourceFormatError",
    "SourceReadError",
    "is_obvious_constant",
]
