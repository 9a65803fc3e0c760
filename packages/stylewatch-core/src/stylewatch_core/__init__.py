"""stylewatch-core: SCSS compilation and directory watching.

This package provides:
- One-shot SCSS to CSS compilation via libsass
- Output directory preparation
- A watch loop that recompiles on every change in the SCSS directory
- Pydantic configuration loadable from stylewatch.yaml
- Structured logging via structlog

Example (one-shot build):
    >>> from stylewatch_core import StyleCompiler, StyleConfig
    >>>
    >>> compiler = StyleCompiler(StyleConfig.from_yaml("stylewatch.yaml"))
    >>> compiler.ensure_output_directory()
    >>> compiler.compile()

Example (development loop):
    >>> from stylewatch_core import watch_stylesheet
    >>>
    >>> watch_stylesheet(
    ...     "src/_includes/scss",
    ...     "src/_includes/scss/main.scss",
    ...     "src/css/main.css",
    ... )
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "StyleConfig",
    "OutputStyle",
    "CONFIG_FILENAME",
    # Compilation
    "StyleCompiler",
    "CompilerState",
    "CompilationResult",
    "compile_stylesheet",
    "ensure_output_directory",
    "render_css",
    # Change sources
    "ChangeEvent",
    "ChangeKind",
    "ChangeSource",
    "StaticChangeSource",
    "WatchdogChangeSource",
    # Watcher
    "StyleWatcher",
    "WatcherState",
    "watch_stylesheet",
    # Observability
    "configure_logging",
    # Exceptions
    "StylewatchError",
    "OutputDirectoryError",
    "StyleCompileError",
    "StyleWriteError",
    "ConfigError",
    "WatcherError",
]


def __getattr__(name: str) -> object:
    """Lazy import of public API members.

    Keeps ``import stylewatch_core`` cheap for the CLI's --help path.

    Args:
        name: The attribute name to look up.

    Returns:
        The requested module member.

    Raises:
        AttributeError: If the attribute is not found.
    """
    if name in ("StyleConfig", "OutputStyle", "CONFIG_FILENAME"):
        from stylewatch_core import config as config_module

        return getattr(config_module, name)

    if name in (
        "StyleCompiler",
        "CompilerState",
        "CompilationResult",
        "compile_stylesheet",
        "ensure_output_directory",
        "render_css",
    ):
        from stylewatch_core import compiler as compiler_module

        return getattr(compiler_module, name)

    if name in (
        "ChangeEvent",
        "ChangeKind",
        "ChangeSource",
        "StaticChangeSource",
        "WatchdogChangeSource",
    ):
        from stylewatch_core import sources as sources_module

        return getattr(sources_module, name)

    if name in ("StyleWatcher", "WatcherState", "watch_stylesheet"):
        from stylewatch_core import watcher as watcher_module

        return getattr(watcher_module, name)

    if name == "configure_logging":
        from stylewatch_core.observability import configure_logging

        return configure_logging

    if name in (
        "StylewatchError",
        "OutputDirectoryError",
        "StyleCompileError",
        "StyleWriteError",
        "ConfigError",
        "WatcherError",
    ):
        from stylewatch_core import errors as errors_module

        return getattr(errors_module, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
