"""CLI tests for the audit command."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from apps.cli.main import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide Typer CLI runner instance."""
    return CliRunner()


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run commands from an empty project directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestAuditCommand:
    """Validate the audit command."""

    def test_all_sources_missing_is_skipped(
        self, cli_runner: CliRunner, project_dir: Path
    ) -> None:
        result = cli_runner.invoke(app, ["audit", "--no-duck"])

        assert result.exit_code == 0
        assert "🔍 Running comprehensive environment audit..." in result.stdout
        assert "No .env.example found, skipping env check" in result.stdout
        assert "No docker-compose.yml found, skipping compose check" in result.stdout
        assert "No Dockerfile found, skipping Dockerfile check" in result.stdout
        assert "✅ Audit passed! Your environment is well organized." in result.stdout

    def test_clean_project_passes(self, cli_runner: CliRunner, project_dir: Path) -> None:
        (project_dir / ".env.example").write_text("DB_HOST=\nAPP_TAG=\n")
        (project_dir / ".env").write_text("DB_HOST=db\nAPP_TAG=1.0\n")
        (project_dir / "docker-compose.yml").write_text(
            "services:\n  app:\n    image: app:${APP_TAG}\n    env_file: .env\n"
            "    environment:\n      - DB_HOST\n"
        )
        (project_dir / "Dockerfile").write_text(
            "FROM alpine\nARG APP_TAG=dev\nLABEL tag=$APP_TAG\nENV DB_HOST=${DB_HOST}\n"
        )

        result = cli_runner.invoke(app, ["audit"])

        assert result.exit_code == 0, result.stdout
        assert "Environment Variable Drift Detective" in result.stdout
        assert "✅ Basic env check passed" in result.stdout
        assert "✅ Docker Compose check passed" in result.stdout
        assert "✅ Dockerfile check passed" in result.stdout
        assert "All good!" in result.stdout

    def test_issues_exit_one(self, cli_runner: CliRunner, project_dir: Path) -> None:
        (project_dir / ".env.example").write_text("A=1\n")
        (project_dir / ".env").write_text("A=1\n")
        (project_dir / "docker-compose.yml").write_text(
            "services:\n  app:\n    env_file: .env.missing\n"
        )

        result = cli_runner.invoke(app, ["audit", "--no-duck", "--no-color"])

        assert result.exit_code == 1
        assert "✅ Basic env check passed" in result.stdout
        assert "  Missing env_files:\n    - .env.missing" in result.stdout
        assert "  Unused variables:\n    - A" in result.stdout
        assert "❌ Audit found issues that need attention!" in result.stdout

    def test_angry_duck_on_failure(self, cli_runner: CliRunner, project_dir: Path) -> None:
        (project_dir / ".env.example").write_text("A=1\n")
        (project_dir / ".env").write_text("")

        result = cli_runner.invoke(app, ["audit"])

        assert result.exit_code == 1
        assert "QUACK! 🦆 Audit found issues that need attention!" in result.stdout

    def test_parse_error_does_not_stop_later_checks(
        self, cli_runner: CliRunner, project_dir: Path
    ) -> None:
        (project_dir / "docker-compose.yml").write_text("services: [\n")
        (project_dir / "Dockerfile").write_text("FROM alpine\n")

        result = cli_runner.invoke(app, ["audit", "--no-duck"])

        assert result.exit_code == 1
        assert "❌ Error parsing compose file:" in result.stdout
        assert "✅ Dockerfile check passed" in result.stdout

    def test_verbose_shows_dockerfile_details(
        self, cli_runner: CliRunner, project_dir: Path
    ) -> None:
        (project_dir / "Dockerfile").write_text(
            "FROM alpine\nARG BUILD_DATE\nLABEL d=$BUILD_DATE\nENV TOKEN=s3cr3t\n"
        )

        result = cli_runner.invoke(
            app, ["audit", "--no-duck", "--no-color", "--verbose"]
        )

        assert result.exit_code == 1
        assert "  Missing variables:\n    - BUILD_DATE" in result.stdout
        assert "  Hardcoded ENV variables:\n    - TOKEN" in result.stdout
        assert "  ARG variables without defaults:\n    - BUILD_DATE" in result.stdout

    def test_custom_paths(self, cli_runner: CliRunner, project_dir: Path) -> None:
        (project_dir / "deploy").mkdir()
        (project_dir / "deploy" / "compose.yaml").write_text(
            "services:\n  app:\n    environment:\n      A: 1\n"
        )
        (project_dir / ".env").write_text("A=1\n")

        result = cli_runner.invoke(
            app, ["audit", "--no-duck", "--compose", "deploy/compose.yaml"]
        )

        assert result.exit_code == 0
        assert "✅ Docker Compose check passed" in result.stdout
