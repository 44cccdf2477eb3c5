"""envquack application shells.

This package contains thin I/O layers over ``packages``:
- cli: Typer CLI
"""
