"""CompareDockerfileUseCase - Dockerfile requirements vs env files."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from packages.core.use_cases.merge_env import merge_env_files
from packages.ingest.readers.dockerfile import DockerfileReader, is_obvious_constant
from packages.ingest.readers.dotenv import DotenvReader
from packages.schemas.env_drift import DockerfileDiffResult, DockerfileInfo

logger = logging.getLogger(__name__)


def compare_dockerfile_with_env(
    dockerfile_info: DockerfileInfo,
    env_vars: Mapping[str, str],
) -> DockerfileDiffResult:
    """Compare what a Dockerfile needs against the merged env variables.

    A variable declared by an ENV instruction supplies its own default, so it
    is never reported missing.

    Args:
        dockerfile_info: Parsed Dockerfile.
        env_vars: Variables merged from the env files.

    Returns:
        DockerfileDiffResult: Missing/extra variables, unused ARGs, hardcoded
            ENV values and ARGs without defaults.
    """
    dockerfile_vars = dockerfile_info.get_all_vars()
    dockerfile_var_set = set(dockerfile_vars)
    refs = set(dockerfile_info.variable_refs)

    return DockerfileDiffResult(
        missing_in_env=[
            name
            for name in dockerfile_vars
            if name not in dockerfile_info.env_vars and name not in env_vars
        ],
        extra_in_env=[name for name in env_vars if name not in dockerfile_var_set],
        unused_args=[name for name in dockerfile_info.arg_vars if name not in refs],
        hardcoded_envs=[
            name
            for name, value in dockerfile_info.env_vars.items()
            if value and not is_obvious_constant(value)
        ],
        missing_arg_defaults=[
            name for name, value in dockerfile_info.arg_vars.items() if value == ""
        ],
    )


class CompareDockerfileUseCase:
    """Use case comparing a Dockerfile against a list of env files."""

    def __init__(
        self,
        dockerfile_reader: DockerfileReader | None = None,
        dotenv_reader: DotenvReader | None = None,
    ) -> None:
        self._dockerfile_reader = dockerfile_reader or DockerfileReader()
        self._dotenv_reader = dotenv_reader or DotenvReader()

    def execute(
        self, dockerfile_path: str | Path, env_files: Sequence[str | Path]
    ) -> DockerfileDiffResult:
        """Parse the Dockerfile and env files, then compare them.

        Raises:
            SourceReadError: If the Dockerfile cannot be read.
        """
        dockerfile_info = self._dockerfile_reader.load_data(dockerfile_path)
        env_vars = merge_env_files(env_files, reader=self._dotenv_reader)

        result = compare_dockerfile_with_env(dockerfile_info, env_vars)
        logger.info(
            "compare_dockerfile.complete dockerfile=%s missing=%s unused_args=%s hardcoded=%s",
            dockerfile_path,
            len(result.missing_in_env),
            len(result.unused_args),
            len(result.hardcoded_envs),
        )
        return result


__all__ = ["CompareDockerfileUseCase", "compare_dockerfile_with_env"]
