"""stylewatch validate command - Validate stylewatch.yaml configuration."""

from __future__ import annotations

from pathlib import Path

import click

from stylewatch_cli.output import print_json, success, warning


@click.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=False),
    default="./stylewatch.yaml",
    help="Path to stylewatch.yaml [default: ./stylewatch.yaml]",
)
@click.option(
    "--show",
    is_flag=True,
    default=False,
    help="Print the resolved configuration as JSON",
)
def validate(config_path: str, show: bool) -> None:
    """Validate stylewatch.yaml configuration.

    Reports unknown keys, invalid output styles and other validation
    errors with field paths. Warns when the SCSS source does not exist
    yet.

    Examples:

        stylewatch validate

        stylewatch validate --config site/stylewatch.yaml --show
    """
    from stylewatch_cli.errors import handle_file_not_found, handle_stylewatch_error
    from stylewatch_core.config import StyleConfig
    from stylewatch_core.errors import ConfigError

    path = Path(config_path)
    if not path.exists():
        handle_file_not_found(config_path)

    try:
        config = StyleConfig.from_yaml(path)
    except ConfigError as e:
        handle_stylewatch_error(e)

    if not config.source_path.is_file():
        warning(f"SCSS source not found: {config.source_path}")

    success("Configuration valid")

    if show:
        print_json(config.model_dump(mode="json"))
