"""CompareComposeUseCase - compose file requirements vs env files."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from packages.core.use_cases.merge_env import merge_env_files
from packages.ingest.readers.docker_compose import DockerComposeReader
from packages.ingest.readers.dotenv import DotenvReader
from packages.ingest.readers.errors import SourceReadError
from packages.schemas.env_drift import ComposeDiffResult, ComposeInfo

logger = logging.getLogger(__name__)

EnvFileProbe = Callable[[str], bool]


def env_file_probe(base_dir: Path | None = None, reader: DotenvReader | None = None) -> EnvFileProbe:
    """Build a probe telling whether a referenced env file can be parsed.

    Relative references are resolved against ``base_dir`` when given. A file
    that exists but cannot be read counts as missing.
    """
    reader = reader or DotenvReader()

    def probe(ref: str) -> bool:
        path = Path(ref)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        try:
            reader.load_data(path)
        except SourceReadError:
            return False
        return True

    return probe


def compare_compose_with_env(
    compose_info: ComposeInfo,
    env_vars: Mapping[str, str],
    env_file_exists: EnvFileProbe | None = None,
) -> ComposeDiffResult:
    """Compare what a compose file needs against the merged env variables.

    Args:
        compose_info: Parsed compose file.
        env_vars: Variables merged from the env files.
        env_file_exists: Probe for env_file references (defaults to parsing
            them relative to the working directory).

    Returns:
        ComposeDiffResult: Missing/extra variables, missing env files and the
            per-service breakdown.
    """
    env_file_exists = env_file_exists or env_file_probe()

    compose_vars = compose_info.get_all_env_vars()
    compose_var_set = set(compose_vars)

    service_breakdown: dict[str, list[str]] = {}
    for service_name, service_vars in compose_info.service_variables.items():
        missing = [name for name in service_vars if name not in env_vars]
        if missing:
            service_breakdown[service_name] = missing

    return ComposeDiffResult(
        missing_in_env=[name for name in compose_vars if name not in env_vars],
        extra_in_env=[name for name in env_vars if name not in compose_var_set],
        missing_env_files=[ref for ref in compose_info.env_file_refs if not env_file_exists(ref)],
        service_breakdown=service_breakdown,
    )


class CompareComposeUseCase:
    """Use case comparing a compose file against a list of env files."""

    def __init__(
        self,
        compose_reader: DockerComposeReader | None = None,
        dotenv_reader: DotenvReader | None = None,
    ) -> None:
        self._compose_reader = compose_reader or DockerComposeReader()
        self._dotenv_reader = dotenv_reader or DotenvReader()

    def execute(self, compose_path: str | Path, env_files: Sequence[str | Path]) -> ComposeDiffResult:
        """Parse the compose file and env files, then compare them.

        env_file references are resolved relative to the compose file's
        directory and reported as written.

        Raises:
            SourceReadError: If the compose file cannot be read.
            InvalidYAMLError: If the compose file is not valid YAML.
        """
        compose_info = self._compose_reader.load_data(compose_path)
        env_vars = merge_env_files(env_files, reader=self._dotenv_reader)

        probe = env_file_probe(Path(compose_path).parent, reader=self._dotenv_reader)
        result = compare_compose_with_env(compose_info, env_vars, env_file_exists=probe)

        logger.info(
            "compare_compose.complete compose=%s missing=%s extra=%s missing_env_files=%s",
            compose_path,
            len(result.missing_in_env),
            len(result.extra_in_env),
            len(result.missing_env_files),
        )
        return result


__all__ = [
    "CompareComposeUseCase",
    "EnvFileProbe",
    "compare_compose_with_env",
    "env_file_probe",
]
