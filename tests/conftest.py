"""Shared pytest fixtures for envquack test suite.

Provides sample compose and Dockerfile sources and keeps ENVQUACK_*
variables and the global logging setup from leaking between tests.
"""

import logging
from collections.abc import Iterator

import pytest

from packages.common.config import EnvQuackConfig, get_config

# ========== Test Environment Setup ==========


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear ENVQUACK_* overrides and restore root logging after each test.

    CLI invocations replace the root logger handlers with one bound to the
    runner's captured stream; handlers added during the test are removed.
    """
    for name in EnvQuackConfig.model_fields:
        monkeypatch.delenv(f"ENVQUACK_{name.upper()}", raising=False)
    get_config.cache_clear()

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    get_config.cache_clear()


# ========== Sample Sources ==========


@pytest.fixture
def sample_compose_yaml() -> str:
    """Compose document exercising both environment shapes and env_file forms."""
    return """
services:
  web:
    image: nginx:alpine
    env_file: .env.web
    environment:
      - NGINX_HOST=example.com
      - NGINX_PORT
  api:
    image: myapp/api:${API_VERSION:-latest}
    env_file:
      - .env
      - .env.web
    environment:
      DATABASE_URL: postgres://db:5432/${DB_NAME}
      DEBUG: false
      API_KEY:
  db:
    image: postgres:15
"""


@pytest.fixture
def sample_dockerfile() -> str:
    """Dockerfile exercising ENV/ARG forms and line continuations."""
    return """# syntax=docker/dockerfile:1
ARG PYTHON_VERSION=3.12
FROM python:${PYTHON_VERSION}-slim

ARG BUILD_DATE
ARG UNUSED_ARG=1

ENV APP_HOME=/app \\
    APP_ENV=production \\
    SECRET_TOKEN="abc 123"
ENV LEGACY_NAME legacy value
env lower_case=kept

WORKDIR $APP_HOME
LABEL build-date=$BUILD_DATE
RUN echo "$DATABASE_URL" && echo $HOME
"""
