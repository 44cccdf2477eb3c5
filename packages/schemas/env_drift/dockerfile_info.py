"""DockerfileInfo schema.

Aggregate parse result of a Dockerfile's ENV and ARG instructions.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.schemas.env_drift.variable_set import VariableSet, sorted_keys, sorted_unique


class DockerfileInfo(BaseModel):
    """Environment information extracted from a Dockerfile.

    An ARG declared without a default is stored with an empty string value.
    """

    model_config = ConfigDict(frozen=True)

    env_vars: VariableSet = Field(
        default_factory=dict,
        description="Variables declared with ENV instructions",
    )
    arg_vars: VariableSet = Field(
        default_factory=dict,
        description="Build arguments declared with ARG instructions ('' means no default)",
    )
    variable_refs: list[str] = Field(
        default_factory=list,
        description="Names referenced through ${VAR} or $VAR anywhere in the file",
    )

    @field_validator("variable_refs")
    @classmethod
    def _sort_unique(cls, v: list[str]) -> list[str]:
        return sorted_unique(v)

    def get_all_vars(self) -> list[str]:
        """Return the union of ENV names, ARG names and references."""
        return sorted_unique([*self.env_vars, *self.arg_vars, *self.variable_refs])

    def get_env_vars(self) -> list[str]:
        """Return ENV instruction names."""
        return sorted_keys(self.env_vars)

    def get_arg_vars(self) -> list[str]:
        """Return ARG instruction names."""
        return sorted_keys(self.arg_vars)

    def has_var(self, name: str) -> bool:
        """Check whether a variable is declared or referenced in any form."""
        return name in self.env_vars or name in self.arg_vars or name in self.variable_refs
