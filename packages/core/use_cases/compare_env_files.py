"""CompareEnvFilesUseCase - env file vs example file."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from packages.ingest.readers.dotenv import DotenvReader
from packages.schemas.env_drift import EnvDiffResult

logger = logging.getLogger(__name__)


def compare_env_vars(env: Mapping[str, str], example: Mapping[str, str]) -> EnvDiffResult:
    """Compare key presence between an env set and an example set.

    Values are never compared.

    Args:
        env: Variables of the env file.
        example: Variables of the example file.

    Returns:
        EnvDiffResult: ``missing`` = example - env, ``extra`` = env - example.
    """
    return EnvDiffResult(
        missing=[key for key in example if key not in env],
        extra=[key for key in env if key not in example],
    )


class CompareEnvFilesUseCase:
    """Use case comparing an env file against its example file."""

    def __init__(self, reader: DotenvReader | None = None) -> None:
        self._reader = reader or DotenvReader()

    def execute(self, env_path: str | Path, example_path: str | Path) -> EnvDiffResult:
        """Parse both files and compare them.

        Raises:
            SourceReadError: If either file cannot be read.
        """
        env = self._reader.load_data(env_path)
        example = self._reader.load_data(example_path)

        result = compare_env_vars(env, example)
        logger.info(
            "compare_env.complete env=%s example=%s missing=%s extra=%s",
            env_path,
            example_path,
            len(result.missing),
            len(result.extra),
        )
        return result


__all__ = ["CompareEnvFilesUseCase", "compare_env_vars"]
