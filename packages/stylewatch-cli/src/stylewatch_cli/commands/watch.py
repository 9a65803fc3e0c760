"""stylewatch watch command - Rebuild the CSS on every change."""

from __future__ import annotations

import click

from stylewatch_cli.options import build_options, load_style_config
from stylewatch_cli.output import compile_failed, css_saved, info, watching


@click.command()
@build_options
def watch(
    config_path: str | None,
    source_path: str | None,
    output_path: str | None,
    output_style: str | None,
) -> None:
    """Compile, then recompile whenever the SCSS directory changes.

    Watches the directory holding the root SCSS file. Any created,
    modified, moved or deleted file triggers a full compile. Compile
    errors after startup are reported and watching continues. Press
    Ctrl+C to stop.

    Examples:

        stylewatch watch

        stylewatch watch --style expanded
    """
    config = load_style_config(
        config_path,
        source_path=source_path,
        output_path=output_path,
        output_style=output_style,
    )

    # Import here to avoid loading libsass and watchdog at CLI startup
    from stylewatch_cli.errors import handle_stylewatch_error
    from stylewatch_core.errors import StylewatchError
    from stylewatch_core.watcher import StyleWatcher

    watcher = StyleWatcher(config, on_compile=css_saved, on_error=compile_failed)
    watching(watcher.watch_dir)

    try:
        watcher.run()
    except KeyboardInterrupt:
        watcher.stop()
        info("Stopped watching.")
    except StylewatchError as e:
        handle_stylewatch_error(e)
