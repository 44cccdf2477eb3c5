"""ComposeInfo schema.

Aggregate parse result of a Docker Compose manifest.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.schemas.env_drift.variable_set import VariableSet, sorted_keys, sorted_unique


class ComposeInfo(BaseModel):
    """Environment information extracted from a compose file.

    Examples:
        >>> info = ComposeInfo(
        ...     variables={"DB_HOST": "db"},
        ...     service_variables={"api": {"DB_HOST": "db"}},
        ...     variable_refs=["API_KEY"],
        ... )
        >>> info.get_all_env_vars()
        ['API_KEY', 'DB_HOST']
    """

    model_config = ConfigDict(frozen=True)

    variables: VariableSet = Field(
        default_factory=dict,
        description="Variables merged across all services (later services win)",
    )
    service_variables: dict[str, VariableSet] = Field(
        default_factory=dict,
        description="Variables per service, only services declaring at least one",
    )
    env_file_refs: list[str] = Field(
        default_factory=list,
        description="Paths referenced by env_file directives",
        examples=[[".env", ".env.local"]],
    )
    variable_refs: list[str] = Field(
        default_factory=list,
        description="Names referenced through ${VAR} or $VAR interpolation",
        examples=[["API_KEY", "DB_PASSWORD"]],
    )

    @field_validator("env_file_refs", "variable_refs")
    @classmethod
    def _sort_unique(cls, v: list[str]) -> list[str]:
        return sorted_unique(v)

    def get_all_env_vars(self) -> list[str]:
        """Return every variable name the compose file defines or references."""
        return sorted_unique([*self.variables, *self.variable_refs])

    def get_service_vars(self, service_name: str) -> VariableSet:
        """Return the variables of one service, or an empty set."""
        return dict(self.service_variables.get(service_name, {}))

    def has_service(self, service_name: str) -> bool:
        """Check whether a service declares any environment variables."""
        return service_name in self.service_variables

    def get_services(self) -> list[str]:
        """Return the names of services that declare environment variables."""
        return sorted_keys(self.service_variables)
