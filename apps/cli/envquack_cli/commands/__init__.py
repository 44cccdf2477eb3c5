"""envquack CLI commands package.

This package contains the CLI command implementations:
- check: env file vs example file
- sync: append missing example keys to the env file
- audit: env, docker-compose and Dockerfile checks in one run
"""

from __future__ import annotations

__all__ = [
    "audit",
    "check",
    "sync",
]
