"""Environment drift schemas.

Pydantic models for the parse results and comparison results produced by
envquack.

Entities:
- VariableSet: Variable name to literal value mapping
- ComposeInfo: Variables, env_file references and interpolations of a compose file
- DockerfileInfo: ENV/ARG declarations and references of a Dockerfile
- EnvDiffResult: Env file vs example file
- ComposeDiffResult: Compose file vs env files
- DockerfileDiffResult: Dockerfile vs env files
"""

from packages.schemas.env_drift.compose_info import ComposeInfo
from packages.schemas.env_drift.diff_results import (
    ComposeDiffResult,
    DockerfileDiffResult,
    EnvDiffResult,
)
from packages.schemas.env_drift.dockerfile_info import DockerfileInfo
from packages.schemas.env_drift.variable_set import VariableSet, sorted_keys, sorted_unique

__all__ = [
    "ComposeDiffResult",
    "ComposeInfo",
    "DockerfileDiffResult",
    "DockerfileInfo",
    "EnvDiffResult",
    "VariableSet",
    "sorted_keys",
    "sorted_unique",
]
