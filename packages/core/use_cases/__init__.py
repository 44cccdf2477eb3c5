"""Core use cases - reconciliation of parsed configuration sources.

The ``compare_*`` functions are pure: they take parsed VariableSets and info
models and return typed diff results. The ``*UseCase`` classes add the file
reading around them.
"""

from __future__ import annotations

from packages.core.use_cases.compare_compose import (
    CompareComposeUseCase,
    compare_compose_with_env,
    env_file_probe,
)
from packages.core.use_cases.compare_dockerfile import (
    CompareDockerfileUseCase,
    compare_dockerfile_with_env,
)
from packages.core.use_cases.compare_env_files import CompareEnvFilesUseCase, compare_env_vars
from packages.core.use_cases.merge_env import merge_env_files

__all__ = [
    "CompareComposeUseCase",
    "CompareDockerfileUseCase",
    "CompareEnvFilesUseCase",
    "compare_compose_with_env",
    "compare_dockerfile_with_env",
    "compare_env_vars",
    "env_file_probe",
    "merge_env_files",
]
