"""stylewatch init command - Scaffold a stylewatch project."""

from __future__ import annotations

from pathlib import Path

import click

from stylewatch_cli.output import error, info, success, warning

CONFIG_TEMPLATE = """\
# stylewatch configuration
# Relative paths are resolved against the directory holding this file.

# Root SCSS file. Its directory is watched for changes.
source_path: {{ source_path }}

# Compiled CSS file. Missing directories are created.
output_path: {{ output_path }}

# One of: nested, expanded, compact, compressed
output_style: {{ output_style }}

# Extra directories searched by @import
include_paths: []

precision: 5
source_comments: false
"""

STYLESHEET_TEMPLATE = """\
// Entry point compiled to {{ output_path }}
$text-color: #0b0c0c;
$link-color: #1d70b8;

body {
  color: $text-color;

  a {
    color: $link-color;
  }
}
"""


@click.command()
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    default="src/css/main.css",
    show_default=True,
    help="CSS file the configuration compiles to",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite existing files",
)
def init(output_path: str, force: bool) -> None:
    """Create stylewatch.yaml and a starter SCSS entry file.

    The SCSS entry file is written to src/_includes/scss/main.scss
    unless it already exists.

    Examples:

        stylewatch init

        stylewatch init --output public/css/site.css

        stylewatch init --force
    """
    from stylewatch_core.config import CONFIG_FILENAME, DEFAULT_SOURCE_PATH, StyleConfig

    config_path = Path(CONFIG_FILENAME)
    existed = config_path.exists()
    if existed and not force:
        error(f"{CONFIG_FILENAME} already exists.")
        error("Use --force to overwrite.")
        raise SystemExit(1)

    try:
        from jinja2.sandbox import SandboxedEnvironment

        env = SandboxedEnvironment(
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        context = {
            "source_path": DEFAULT_SOURCE_PATH.as_posix(),
            "output_path": Path(output_path).as_posix(),
            "output_style": StyleConfig.model_fields["output_style"].default,
        }

        config_path.write_text(env.from_string(CONFIG_TEMPLATE).render(**context))

        stylesheet_path = DEFAULT_SOURCE_PATH
        if not stylesheet_path.exists() or force:
            stylesheet_path.parent.mkdir(parents=True, exist_ok=True)
            stylesheet_path.write_text(env.from_string(STYLESHEET_TEMPLATE).render(**context))
            info(f"Wrote {stylesheet_path.as_posix()}")

    except PermissionError as e:
        from stylewatch_cli.errors import handle_permission_error

        handle_permission_error(str(e.filename or Path.cwd()), "write")

    except OSError as e:
        error(f"Failed to create project: {e}")
        raise SystemExit(2) from None

    if existed:
        warning(f"Overwrote existing {CONFIG_FILENAME}")

    success(f"Created {CONFIG_FILENAME}")
