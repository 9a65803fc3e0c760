"""stylewatch compile command - Build the CSS once."""

from __future__ import annotations

import click

from stylewatch_cli.options import build_options, load_style_config
from stylewatch_cli.output import css_saved


@click.command("compile")
@build_options
def compile_cmd(
    config_path: str | None,
    source_path: str | None,
    output_path: str | None,
    output_style: str | None,
) -> None:
    """Compile the root SCSS file into a single CSS file.

    Creates the output directory when it is missing, then overwrites
    the CSS file with the compiled stylesheet.

    Examples:

        stylewatch compile

        stylewatch compile --style compressed

        stylewatch compile -s scss/site.scss -o public/site.css
    """
    config = load_style_config(
        config_path,
        source_path=source_path,
        output_path=output_path,
        output_style=output_style,
    )

    # Import here to avoid loading libsass at CLI startup
    from stylewatch_cli.errors import handle_stylewatch_error
    from stylewatch_core.compiler import StyleCompiler
    from stylewatch_core.errors import StylewatchError

    compiler = StyleCompiler(config)
    try:
        compiler.ensure_output_directory()
        result = compiler.compile()
    except StylewatchError as e:
        handle_stylewatch_error(e)

    css_saved(result, show_duration=True)
