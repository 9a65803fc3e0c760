"""Shared options for the compile and watch commands.

Both commands accept a configuration file plus overrides for the
source, output and output style, and resolve them the same way.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import click

from stylewatch_core.config import OUTPUT_STYLES

if TYPE_CHECKING:
    from stylewatch_core.config import StyleConfig

F = TypeVar("F", bound=Callable[..., Any])


def build_options(func: F) -> F:
    """Attach the -c/-s/-o/--style options to a command."""
    func = click.option(
        "--style",
        "output_style",
        type=click.Choice(OUTPUT_STYLES),
        default=None,
        help="CSS output style [default: from config, else nested]",
    )(func)
    func = click.option(
        "-o",
        "--output",
        "output_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="CSS file to write [default: src/css/main.css]",
    )(func)
    func = click.option(
        "-s",
        "--source",
        "source_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="Root SCSS file [default: src/_includes/scss/main.scss]",
    )(func)
    func = click.option(
        "-c",
        "--config",
        "config_path",
        type=click.Path(exists=False),
        default=None,
        help="Path to stylewatch.yaml [default: ./stylewatch.yaml if present]",
    )(func)
    return func


def load_style_config(
    config_path: str | None,
    *,
    source_path: str | None = None,
    output_path: str | None = None,
    output_style: str | None = None,
) -> StyleConfig:
    """Resolve the build configuration for a command invocation.

    An explicit --config must exist. Without one, ./stylewatch.yaml is
    used when present, otherwise the built-in defaults. Command line
    values override file values.

    Raises:
        CLIError: Missing config file (exit 2), invalid config or
            options (exit 1).
    """
    from pydantic import ValidationError as PydanticValidationError

    from stylewatch_cli.errors import (
        CLIError,
        format_validation_error,
        handle_file_not_found,
        handle_stylewatch_error,
    )
    from stylewatch_core.config import CONFIG_FILENAME, StyleConfig
    from stylewatch_core.errors import ConfigError

    if config_path is not None:
        path: Path | None = Path(config_path)
        if not path.exists():
            handle_file_not_found(config_path)
    else:
        default = Path(CONFIG_FILENAME)
        path = default if default.exists() else None

    try:
        config = StyleConfig.from_yaml(path) if path is not None else StyleConfig()
        return config.with_overrides(
            source_path=Path(source_path) if source_path is not None else None,
            output_path=Path(output_path) if output_path is not None else None,
            output_style=output_style,
        )
    except ConfigError as e:
        handle_stylewatch_error(e)
    except PydanticValidationError as e:
        raise CLIError(format_validation_error(e)) from e
