"""Typed comparison results.

Every list field is normalised to sorted, de-duplicated form on construction.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.schemas.env_drift.variable_set import sorted_unique


class EnvDiffResult(BaseModel):
    """Difference between an env file and its example file."""

    model_config = ConfigDict(frozen=True)

    missing: list[str] = Field(
        default_factory=list,
        description="Keys present in the example but absent from the env file",
    )
    extra: list[str] = Field(
        default_factory=list,
        description="Keys present in the env file but absent from the example",
    )

    @field_validator("missing", "extra")
    @classmethod
    def _sort_unique(cls, v: list[str]) -> list[str]:
        return sorted_unique(v)

    def has_issues(self) -> bool:
        """Return True if the two files disagree on any key."""
        return bool(self.missing or self.extra)

    def summary(self) -> str:
        """Return a one-line summary such as ``"2 missing, 1 extra"``."""
        if not self.has_issues():
            return "No issues found"

        parts: list[str] = []
        if self.missing:
            parts.append(f"{len(self.missing)} missing")
        if self.extra:
            parts.append(f"{len(self.extra)} extra")
        return ", ".join(parts)


class ComposeDiffResult(BaseModel):
    """Difference between compose requirements and env files."""

    model_config = ConfigDict(frozen=True)

    missing_in_env: list[str] = Field(default_factory=list)
    extra_in_env: list[str] = Field(default_factory=list)
    missing_env_files: list[str] = Field(default_factory=list)
    service_breakdown: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Missing variables per service, only services with at least one",
    )

    @field_validator("missing_in_env", "extra_in_env", "missing_env_files")
    @classmethod
    def _sort_unique(cls, v: list[str]) -> list[str]:
        return sorted_unique(v)

    @field_validator("service_breakdown")
    @classmethod
    def _normalize_breakdown(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        return {name: sorted_unique(v[name]) for name in sorted(v) if v[name]}

    def has_issues(self) -> bool:
        """Return True if anything is missing or unused.

        ``service_breakdown`` is a per-service view of ``missing_in_env`` and
        does not count on its own.
        """
        return bool(self.missing_in_env or self.extra_in_env or self.missing_env_files)


class DockerfileDiffResult(BaseModel):
    """Difference between Dockerfile requirements and env files."""

    model_config = ConfigDict(frozen=True)

    missing_in_env: list[str] = Field(default_factory=list)
    extra_in_env: list[str] = Field(default_factory=list)
    unused_args: list[str] = Field(default_factory=list)
    hardcoded_envs: list[str] = Field(default_factory=list)
    missing_arg_defaults: list[str] = Field(default_factory=list)

    @field_validator(
        "missing_in_env",
        "extra_in_env",
        "unused_args",
        "hardcoded_envs",
        "missing_arg_defaults",
    )
    @classmethod
    def _sort_unique(cls, v: list[str]) -> list[str]:
        return sorted_unique(v)

    def has_issues(self) -> bool:
        """Return True if the Dockerfile and env files disagree.

        ARGs without defaults are informational and do not count.
        """
        return bool(
            self.missing_in_env or self.extra_in_env or self.unused_args or self.hardcoded_envs
        )
