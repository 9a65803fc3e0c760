"""stylewatch-cli: command line interface for stylewatch.

Commands:
- stylewatch compile: one-shot SCSS to CSS build
- stylewatch watch: compile, then recompile on every change
- stylewatch init: write a starter stylewatch.yaml and SCSS entry file
- stylewatch validate: check a stylewatch.yaml file
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
