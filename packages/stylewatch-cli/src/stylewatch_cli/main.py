"""CLI entry point for stylewatch.

This module defines the main CLI group using the LazyGroup pattern so
that 'stylewatch --help' does not import libsass or watchdog.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from stylewatch_cli import __version__
from stylewatch_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Commands are only imported when actually invoked, not at import time.

    Attributes:
        lazy_subcommands: Mapping of command names to module paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"watch": "stylewatch_cli.commands.watch.watch"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return sorted command names, lazy and registered."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, loading lazily if needed.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "compile": "stylewatch_cli.commands.compile.compile_cmd",
    "watch": "stylewatch_cli.commands.watch.watch",
    "init": "stylewatch_cli.commands.init.init",
    "validate": "stylewatch_cli.commands.validate.validate",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="stylewatch")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum level for structured log output.",
)
@click.option(
    "--json-logs",
    is_flag=True,
    default=False,
    help="Emit structured logs as JSON lines.",
)
def cli(log_level: str, json_logs: bool) -> None:
    """Stylewatch - SCSS compiler and watcher.

    Compile a root SCSS file into a single CSS file, once or every time
    the SCSS directory changes.

    **Getting Started:**

    - `stylewatch init` - Create stylewatch.yaml and a starter stylesheet
    - `stylewatch compile` - Build the CSS once
    - `stylewatch watch` - Rebuild the CSS on every change
    - `stylewatch validate` - Check your configuration
    """
    from stylewatch_core.observability import configure_logging

    configure_logging(log_level=log_level, json_format=json_logs)


if __name__ == "__main__":
    cli()
