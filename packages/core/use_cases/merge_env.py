"""Merge several dotenv files into one VariableSet."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from packages.ingest.readers.dotenv import DotenvReader
from packages.ingest.readers.errors import SourceReadError
from packages.schemas.env_drift import VariableSet

logger = logging.getLogger(__name__)


def merge_env_files(
    env_files: Iterable[str | Path],
    reader: DotenvReader | None = None,
) -> VariableSet:
    """Read env files in order, later files overriding earlier ones.

    Files that cannot be read are skipped. The compose comparison reports
    unreadable env_file references separately; plain merging does not.

    Args:
        env_files: Paths in override order.
        reader: Dotenv reader to use (a new one by default).

    Returns:
        VariableSet: The merged variables.
    """
    reader = reader or DotenvReader()
    merged: VariableSet = {}

    for env_file in env_files:
        try:
            variables = reader.load_data(env_file)
        except SourceReadError as e:
            logger.debug("merge_env.skip file=%s reason=%s", env_file, e)
            continue
        merged.update(variables)

    return merged


__all__ = ["merge_env_files"]
