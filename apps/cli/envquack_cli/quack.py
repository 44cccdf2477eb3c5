"""Duck ASCII art used by envquack reports."""

HAPPY_DUCK = r"""   __
<(o )___   All good!
 ( ._> /
  '---'"""

ANGRY_DUCK = r"""   __
<(X )___   QUACK!
 ( ._> /
  '---'"""

SYNC_DUCK = r"""   __
<(~ )___   Syncing...
 ( ._> /
  '---'"""

BANNER = r"""
 ___            ___                 _
| __|_ ___ ___ / _ \ _  _ __ _ __ _| |__
| _|| ' \ V / | (_) | || / _` / _| / /
|___|_||_\_/   \__\_\\_,_\__,_\__|_\_\

Environment Variable Drift Detective
"""


def get_happy_duck() -> str:
    return HAPPY_DUCK


def get_angry_duck() -> str:
    return ANGRY_DUCK


def get_sync_message() -> str:
    return SYNC_DUCK


def get_banner() -> str:
    return BANNER


__all__ = ["get_angry_duck", "get_banner", "get_happy_duck", "get_sync_message"]
