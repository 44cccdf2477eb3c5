"""Compatibility module exposing the CLI Typer app under ``apps.cli``.

Tests and entry points import ``apps.cli.main``; this module re-exports the
Typer application instance from ``envquack_cli``.
"""

from __future__ import annotations

from apps.cli.envquack_cli.main import app

__all__ = ["app"]
