"""Stylesheet watcher: compile on startup and on every directory change.

This module provides the watch loop used during local development.

Architecture:
- StyleWatcher: prepares the output directory, compiles once, then
  consumes a ChangeSource and recompiles per event
- watch_stylesheet(): functional entry point over StyleWatcher

Behaviour:
- The startup compile failure propagates to the caller
- A failure after a change event is logged and reported to on_error;
  the loop keeps listening
- No debouncing: every event triggers one full compile
- Events are consumed on the calling thread, one compile at a time

Usage:
    >>> watcher = StyleWatcher(StyleConfig(output_path=Path("dist/css/main.css")))
    >>> watcher.run()  # blocks until watcher.stop() or process exit
"""

from __future__ import annotations

import enum
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from stylewatch_core.compiler import CompilationResult, StyleCompiler
from stylewatch_core.config import StyleConfig
from stylewatch_core.errors import WatcherError
from stylewatch_core.sources import ChangeEvent, WatchdogChangeSource

if TYPE_CHECKING:
    from stylewatch_core.sources import ChangeSource

logger = structlog.get_logger(__name__)


class WatcherState(enum.Enum):
    """State of the StyleWatcher.

    Attributes:
        STOPPED: Watcher is not running
        RUNNING: Watcher is compiling or waiting for changes
    """

    STOPPED = "stopped"
    RUNNING = "running"


# Type alias for callbacks
CompileCallback = Callable[[CompilationResult], None]
ErrorCallback = Callable[[Exception], None]


class StyleWatcher:
    """Keeps the compiled stylesheet in sync with its SCSS sources.

    Attributes:
        config: Build configuration
        watch_dir: Directory whose changes trigger a compile
        compile_count: Successful compiles, startup included
        failure_count: Compiles that failed after a change event
        state: Current watcher state (STOPPED or RUNNING)

    Example:
        >>> # Real filesystem notifications
        >>> StyleWatcher(config).run()

        >>> # Scripted events, e.g. in tests
        >>> source = StaticChangeSource([ChangeEvent(kind="modified", path=p)])
        >>> watcher = StyleWatcher(config, source=source)
        >>> watcher.run()
        >>> watcher.compile_count
        2
    """

    def __init__(
        self,
        config: StyleConfig,
        *,
        watch_dir: Path | str | None = None,
        source: ChangeSource | None = None,
        on_compile: CompileCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Initialize StyleWatcher.

        Args:
            config: Build configuration.
            watch_dir: Directory to watch (default: the source file's parent).
            source: Change source to consume. Defaults to a
                WatchdogChangeSource on watch_dir, created anew by each
                run() after the startup compile.
            on_compile: Optional callback after each successful compile.
            on_error: Optional callback when a change-triggered compile, or
                the on_compile callback after it, fails.
        """
        self._config = config
        self._watch_dir = Path(watch_dir) if watch_dir is not None else config.watch_dir
        self._source = source
        self._active_source: ChangeSource | None = None
        self._on_compile = on_compile
        self._on_error = on_error
        self._compiler = StyleCompiler(config)

        self._state = WatcherState.STOPPED
        self._compile_count = 0
        self._failure_count = 0
        self._stop_requested = False
        self._lock = threading.Lock()
        self._log = logger.bind(
            source=str(config.source_path),
            output=str(config.output_path),
        )

    @property
    def config(self) -> StyleConfig:
        """Get the build configuration."""
        return self._config

    @property
    def watch_dir(self) -> Path:
        """Get the watched directory."""
        return self._watch_dir

    @property
    def compiler(self) -> StyleCompiler:
        """Get the underlying compiler."""
        return self._compiler

    @property
    def compile_count(self) -> int:
        """Number of successful compiles so far."""
        return self._compile_count

    @property
    def failure_count(self) -> int:
        """Number of change-triggered compiles that failed."""
        return self._failure_count

    @property
    def state(self) -> WatcherState:
        """Get the current watcher state."""
        with self._lock:
            return self._state

    def run(self) -> None:
        """Compile once, then recompile on every change until stopped.

        Raises:
            WatcherError: If the watcher is already running, or the watch
                directory cannot be observed.
            OutputDirectoryError: If the output directory cannot be created.
            StyleCompileError: If the startup compile fails.
            StyleWriteError: If the startup write fails.
        """
        with self._lock:
            if self._state == WatcherState.RUNNING:
                raise WatcherError("Watcher is already running")
            self._state = WatcherState.RUNNING
            self._stop_requested = False

        try:
            self._compiler.ensure_output_directory()
            self._record(self._compiler.compile())

            with self._lock:
                if self._stop_requested:
                    return
                # A default source is created per run; closed sources cannot restart
                source = self._source
                if source is None:
                    source = WatchdogChangeSource(
                        self._watch_dir,
                        ignore=[self._config.output_path],
                    )
                self._active_source = source

            self._log.info("watching_for_changes", directory=str(self._watch_dir))
            try:
                for event in source:
                    self._on_change(event)
            finally:
                source.close()
        finally:
            with self._lock:
                self._state = WatcherState.STOPPED
                self._active_source = None
            self._log.info("watcher_stopped", compiles=self._compile_count)

    def stop(self) -> None:
        """Stop watching. Safe to call from another thread or when not running."""
        with self._lock:
            self._stop_requested = True
            source = self._active_source if self._active_source is not None else self._source
        if source is not None:
            source.close()

    def _on_change(self, event: ChangeEvent) -> None:
        """Recompile after a change; failures do not end the loop."""
        self._log.info(
            "scss_file_changed",
            file=f"{self._watch_dir}/{event.filename}",
            kind=event.kind.value,
        )

        try:
            result = self._compiler.compile()
        except Exception as e:
            self._failure_count += 1
            self._log.error("compile_failed", error=str(e))
            if self._on_error is not None:
                self._on_error(e)
            return

        try:
            self._record(result)
        except Exception as e:
            self._log.error("compile_callback_failed", error=str(e))
            if self._on_error is not None:
                self._on_error(e)

    def _record(self, result: CompilationResult) -> None:
        self._compile_count += 1
        if self._on_compile is not None:
            self._on_compile(result)


def watch_stylesheet(
    source_dir: Path | str,
    source_path: Path | str,
    output_path: Path | str,
    *,
    source: ChangeSource | None = None,
    on_compile: CompileCallback | None = None,
    on_error: ErrorCallback | None = None,
    **options: Any,
) -> StyleWatcher:
    """Compile source_path to output_path and keep it updated.

    Blocks until the change source is exhausted or closed.

    Args:
        source_dir: Directory whose changes trigger a compile.
        source_path: Root SCSS file.
        output_path: CSS file to write.
        source: Optional change source (default: watchdog on source_dir).
        on_compile: Optional callback after each successful compile.
        on_error: Optional callback when a change-triggered compile fails.
        **options: Extra StyleConfig fields (output_style, include_paths, ...).

    Returns:
        The StyleWatcher after it stopped, for inspecting its counters.
    """
    config = StyleConfig(
        source_path=Path(source_path),
        output_path=Path(output_path),
        **options,
    )
    watcher = StyleWatcher(
        config,
        watch_dir=source_dir,
        source=source,
        on_compile=on_compile,
        on_error=on_error,
    )
    watcher.run()
    return watcher
