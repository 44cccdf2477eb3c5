"""Tests for DockerComposeReader.

Covers both ``environment`` shapes, ``env_file`` normalisation, interpolation
reference extraction and malformed documents.
"""

from pathlib import Path

import pytest

from packages.ingest.readers.docker_compose import (
    DockerComposeReader,
    InvalidYAMLError,
    extract_variable_references,
    parse_env_file_section,
    parse_environment_section,
)
from packages.ingest.readers.errors import SourceFormatError, SourceReadError


class TestDockerComposeReader:
    """Test DockerComposeReader on a realistic compose file."""

    @pytest.fixture
    def compose_file(self, tmp_path: Path, sample_compose_yaml: str) -> Path:
        """Write the sample compose document to disk."""
        path = tmp_path / "docker-compose.yml"
        path.write_text(sample_compose_yaml)
        return path

    def test_load_data_merges_service_variables(self, compose_file: Path) -> None:
        """Test variables from all services are merged."""
        info = DockerComposeReader().load_data(compose_file)

        assert info.variables == {
            "NGINX_HOST": "example.com",
            "NGINX_PORT": "",
            "DATABASE_URL": "postgres://db:5432/${DB_NAME}",
            "DEBUG": "false",
            "API_KEY": "",
        }

    def test_load_data_keeps_per_service_variables(self, compose_file: Path) -> None:
        """Test per-service sets only contain services declaring variables."""
        info = DockerComposeReader().load_data(compose_file)

        assert info.get_services() == ["api", "web"]
        assert info.get_service_vars("web") == {"NGINX_HOST": "example.com", "NGINX_PORT": ""}
        assert not info.has_service("db")
        assert info.get_service_vars("db") == {}

    def test_load_data_collects_env_file_refs(self, compose_file: Path) -> None:
        """Test string and list env_file forms are collected, de-duplicated and sorted."""
        info = DockerComposeReader().load_data(compose_file)

        assert info.env_file_refs == [".env", ".env.web"]

    def test_load_data_collects_variable_refs(self, compose_file: Path) -> None:
        """Test interpolations anywhere in the document are collected."""
        info = DockerComposeReader().load_data(compose_file)

        assert info.variable_refs == ["API_VERSION", "DB_NAME"]
        assert info.get_all_env_vars() == [
            "API_KEY",
            "API_VERSION",
            "DATABASE_URL",
            "DB_NAME",
            "DEBUG",
            "NGINX_HOST",
            "NGINX_PORT",
        ]

    def test_later_service_wins_on_conflict(self) -> None:
        """Test the merged view keeps the value of the later service."""
        content = """
services:
  a:
    environment:
      SHARED: from-a
  b:
    environment:
      SHARED: from-b
"""
        info = DockerComposeReader().parse_data(content)

        assert info.variables == {"SHARED": "from-b"}
        assert info.get_service_vars("a") == {"SHARED": "from-a"}

    def test_file_not_found(self, tmp_path: Path) -> None:
        """Test missing file raises SourceReadError."""
        with pytest.raises(SourceReadError):
            DockerComposeReader().load_data(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed YAML raises InvalidYAMLError naming the file."""
        compose_file = tmp_path / "docker-compose.yml"
        compose_file.write_text("services:\n  web:\n    image: [unclosed\n")

        with pytest.raises(InvalidYAMLError) as exc_info:
            DockerComposeReader().load_data(compose_file)

        assert str(compose_file) in str(exc_info.value)
        assert isinstance(exc_info.value, SourceFormatError)

    def test_non_mapping_root_is_invalid(self) -> None:
        """Test a YAML list at the root is rejected."""
        with pytest.raises(InvalidYAMLError):
            DockerComposeReader().parse_data("- just\n- a list\n")

    def test_non_mapping_services_is_invalid(self) -> None:
        """Test a services value that is not a mapping is rejected."""
        with pytest.raises(InvalidYAMLError):
            DockerComposeReader().parse_data("services:\n  - web\n")

    def test_empty_document(self) -> None:
        """Test an empty document yields empty info."""
        info = DockerComposeReader().parse_data(b"")

        assert info.variables == {}
        assert info.env_file_refs == []
        assert info.variable_refs == []

    def test_no_services_still_collects_refs(self) -> None:
        """Test references are found even without a services section."""
        info = DockerComposeReader().parse_data("x-common:\n  image: app:${TAG}\n")

        assert info.variables == {}
        assert info.variable_refs == ["TAG"]

    def test_invalid_service_entry_is_skipped(self) -> None:
        """Test a non-mapping service value is ignored."""
        content = "services:\n  broken: just-a-string\n  ok:\n    environment:\n      - A=1\n"

        info = DockerComposeReader().parse_data(content)

        assert info.variables == {"A": "1"}


    def test_merge_tags_are_accepted(self) -> None:
        """Test compose merge tags such as !reset and !override parse as plain values."""
        content = """
services:
  api:
    image: app
    ports: !reset []
    environment: !override
      B: x
    env_file: !reset .env.api
"""
        info = DockerComposeReader().parse_data(content)

        assert info.variables == {"B": "x"}
        assert info.env_file_refs == [".env.api"]

    def test_environment_shapes_normalise_identically(self) -> None:
        """Test list and mapping environment documents yield the same variables."""
        list_form = 'services:\n  app:\n    environment: ["A=1", "B"]\n'
        mapping_form = "services:\n  app:\n    environment: {A: 1, B: null}\n"

        list_info = DockerComposeReader().parse_data(list_form)
        mapping_info = DockerComposeReader().parse_data(mapping_form)

        assert list_info.variables == mapping_info.variables == {"A": "1", "B": ""}


class TestEnvironmentSection:
    """Test normalisation of the environment key."""

    def test_list_form(self) -> None:
        """Test KEY=VALUE and bare KEY entries."""
        variables = parse_environment_section(["A=1", "B", " C = x=y ", ""])

        assert variables == {"A": "1", "B": "", "C": "x=y"}

    def test_mapping_form_scalars(self) -> None:
        """Test null, bool and numeric mapping values."""
        variables = parse_environment_section({"A": None, "B": True, "C": 5, "D": "text"})

        assert variables == {"A": "", "B": "true", "C": "5", "D": "text"}

    def test_unsupported_shape(self) -> None:
        """Test other shapes produce nothing."""
        assert parse_environment_section("A=1") == {}
        assert parse_environment_section(None) == {}


class TestEnvFileSection:
    """Test normalisation of the env_file key."""

    def test_string(self) -> None:
        assert parse_env_file_section(".env") == [".env"]

    def test_list_with_long_syntax(self) -> None:
        """Test list entries may be strings or {path: ...} mappings."""
        refs = parse_env_file_section([".env", {"path": ".env.local", "required": False}, 3])

        assert refs == [".env", ".env.local"]

    def test_missing(self) -> None:
        assert parse_env_file_section(None) == []


class TestVariableReferences:
    """Test interpolation reference extraction."""

    def test_all_forms(self) -> None:
        """Test braced, modifier and bare forms."""
        content = "a: ${BRACED}\nb: ${WITH_DEFAULT:-x}\nc: ${REQUIRED:?err}\nd: $BARE\n"

        assert extract_variable_references(content) == [
            "BARE",
            "BRACED",
            "REQUIRED",
            "WITH_DEFAULT",
        ]

    def test_builtins_are_excluded(self) -> None:
        """Test host and compose runtime variables are filtered."""
        content = "a: ${HOME}/data\nb: $COMPOSE_PROJECT_NAME\nc: ${APP_DIR}\n"

        assert extract_variable_references(content) == ["APP_DIR"]

    def test_dollar_escape_is_not_a_reference(self) -> None:
        """Test $$VAR is a literal dollar sign."""
        assert extract_variable_references("cmd: echo $$LITERAL ${REAL}\n") == ["REAL"]

    def test_lowercase_names_are_ignored(self) -> None:
        """Test only upper-case names count as references."""
        assert extract_variable_references("a: ${lower} $also_lower\n") == []

    def test_duplicates_are_collapsed(self) -> None:
        assert extract_variable_references("${A} $A ${A:-1}") == ["A"]
