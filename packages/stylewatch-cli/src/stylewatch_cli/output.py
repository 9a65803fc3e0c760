"""Console output for stylewatch-cli.

Generic status lines (success/error/warning/info) plus the build
reports shared by the compile and watch commands. Colors follow the
NO_COLOR environment variable and the --no-color flag. Text coming from
the stylesheet compiler is printed verbatim, never parsed as markup.
"""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from pathlib import Path

    from stylewatch_core.compiler import CompilationResult

_env_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a console that never wraps long paths.

    Args:
        no_color: Disable colored output. NO_COLOR in the environment
            has the same effect.
    """
    disabled = no_color or _env_no_color
    return Console(
        force_terminal=False if disabled else None,
        no_color=disabled,
        soft_wrap=True,
    )


console = create_console()


def set_no_color(no_color: bool) -> None:
    """Replace the module console, used by the --no-color flag."""
    global console
    console = create_console(no_color=no_color)


def success(message: str, **kwargs: Any) -> None:
    """Print a line prefixed with a green checkmark."""
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print a line prefixed with a red X."""
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a line prefixed with a yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    console.print(message, **kwargs)


def print_json(data: dict[str, Any], **kwargs: Any) -> None:
    """Print a mapping as highlighted JSON."""
    console.print_json(json.dumps(data), **kwargs)


def css_saved(result: CompilationResult, *, show_duration: bool = False) -> None:
    """Report a written stylesheet.

    Example:
        >>> css_saved(result, show_duration=True)
        ✓ CSS file saved: src/css/main.css (12 ms)
    """
    message = f"CSS file saved: {escape(str(result.output_path))}"
    if show_duration:
        message += f" ({result.duration_ms:.0f} ms)"
    success(message)


def compile_failed(err: Exception) -> None:
    """Report a failed build with the compiler's own message.

    Core exceptions are reported by their message, without details.
    """
    message = getattr(err, "message", None) or str(err)
    error(escape(message), highlight=False)


def watching(directory: Path) -> None:
    """Announce the directory the watch loop observes."""
    info(f"Watching {escape(directory.as_posix())} for changes. Press Ctrl+C to stop.")
