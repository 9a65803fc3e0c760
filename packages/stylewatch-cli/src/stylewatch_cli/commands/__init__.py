"""CLI command modules.

Each command is loaded lazily by stylewatch_cli.main.LazyGroup.
"""

from __future__ import annotations

__all__: list[str] = []
