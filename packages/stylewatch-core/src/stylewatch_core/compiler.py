"""SCSS to CSS compilation.

This module turns the root SCSS file into a single CSS file using libsass.

Architecture:
- ensure_output_directory(): creates the output file's parent directory
- compile_stylesheet(): transform in memory, then write the output file
- StyleCompiler: config-bound compiler exposing an Idle/Compiling state

The transform always completes before the output file is opened, so a
syntax error never truncates or replaces an existing stylesheet. Writes
are plain overwrites, not atomic renames.
"""

from __future__ import annotations

import enum
import time
from pathlib import Path
from typing import TYPE_CHECKING

import sass
import structlog
from pydantic import BaseModel, ConfigDict, Field

from stylewatch_core.errors import OutputDirectoryError, StyleCompileError, StyleWriteError
from stylewatch_core.observability import span

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stylewatch_core.config import StyleConfig

logger = structlog.get_logger(__name__)


class CompilerState(enum.Enum):
    """State of a StyleCompiler.

    Attributes:
        IDLE: No compilation in progress
        COMPILING: A compilation is running
    """

    IDLE = "idle"
    COMPILING = "compiling"


class CompilationResult(BaseModel):
    """Outcome of a successful compilation.

    Attributes:
        source_path: SCSS file that was compiled.
        output_path: CSS file that was written.
        css: Compiled CSS text, as written.
        duration_ms: Wall time spent transforming and writing.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_path: Path
    output_path: Path
    css: str
    duration_ms: float = Field(ge=0.0)


def ensure_output_directory(output_path: Path | str) -> bool:
    """Create the parent directory of output_path if it is missing.

    Args:
        output_path: Path of the CSS file that will be written.

    Returns:
        True if a directory was created, False if it already existed.

    Raises:
        OutputDirectoryError: If the directory cannot be created.

    Example:
        >>> ensure_output_directory(Path("dist/css/main.css"))
        True
    """
    directory = Path(output_path).parent
    if directory.is_dir():
        return False

    log = logger.bind(directory=str(directory))
    log.info("creating_css_directory")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log.error("css_directory_error", error=str(e))
        msg = f"Cannot create CSS directory: {directory} - {e}"
        raise OutputDirectoryError(msg, directory=str(directory)) from e

    log.info("css_directory_created")
    return True


def render_css(
    source_path: Path | str,
    *,
    output_style: str = "nested",
    include_paths: Sequence[Path | str] = (),
    precision: int = 5,
    source_comments: bool = False,
) -> str:
    """Transform an SCSS file into CSS text without touching the filesystem.

    Args:
        source_path: Root SCSS file. Its imports are resolved relative to it
            and to include_paths.
        output_style: libsass output style.
        include_paths: Extra @import search directories.
        precision: Decimal places for numbers.
        source_comments: Emit line-number comments.

    Returns:
        Compiled CSS text.

    Raises:
        StyleCompileError: If the source is missing or fails to compile.
    """
    source = Path(source_path)
    try:
        return sass.compile(
            filename=str(source),
            output_style=output_style,
            include_paths=[str(p) for p in include_paths],
            precision=precision,
            source_comments=source_comments,
        )
    except sass.CompileError as e:
        logger.error("scss_compile_error", source=str(source), error=str(e))
        raise StyleCompileError(str(e).strip(), source=str(source)) from e
    except OSError as e:
        # libsass raises IOError for a source path that is not a file
        logger.error("scss_source_missing", source=str(source))
        msg = f"Stylesheet source not found: {source}"
        raise StyleCompileError(msg, source=str(source)) from e


def write_css(css: str, output_path: Path | str) -> None:
    """Write compiled CSS to output_path, replacing any previous content.

    Raises:
        StyleWriteError: If the file cannot be written.
    """
    output = Path(output_path)
    try:
        output.write_text(css, encoding="utf-8")
    except OSError as e:
        logger.error("css_write_error", output=str(output), error=str(e))
        msg = f"Cannot write CSS file: {output} - {e}"
        raise StyleWriteError(msg, output=str(output)) from e


def compile_stylesheet(
    source_path: Path | str,
    output_path: Path | str,
    *,
    output_style: str = "nested",
    include_paths: Sequence[Path | str] = (),
    precision: int = 5,
    source_comments: bool = False,
) -> CompilationResult:
    """Compile source_path and write the CSS to output_path.

    The output directory must already exist; see ensure_output_directory().

    Args:
        source_path: Root SCSS file.
        output_path: CSS file to (over)write.
        output_style: libsass output style.
        include_paths: Extra @import search directories.
        precision: Decimal places for numbers.
        source_comments: Emit line-number comments.

    Returns:
        CompilationResult describing the written file.

    Raises:
        StyleCompileError: If the transform fails. output_path is untouched.
        StyleWriteError: If writing the output fails.

    Example:
        >>> result = compile_stylesheet("scss/main.scss", "css/main.css")
        >>> result.output_path
        PosixPath('css/main.css')
    """
    source = Path(source_path)
    output = Path(output_path)
    started = time.perf_counter()

    with span(
        "stylewatch.compile",
        attributes={
            "stylewatch.source": str(source),
            "stylewatch.output": str(output),
            "stylewatch.output_style": output_style,
        },
    ):
        css = render_css(
            source,
            output_style=output_style,
            include_paths=include_paths,
            precision=precision,
            source_comments=source_comments,
        )
        write_css(css, output)

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info("css_file_saved", output=str(output), duration_ms=round(duration_ms, 2))

    return CompilationResult(
        source_path=source,
        output_path=output,
        css=css,
        duration_ms=duration_ms,
    )


class StyleCompiler:
    """Compiler bound to a StyleConfig.

    Attributes:
        config: Build configuration
        state: IDLE, or COMPILING while compile() runs

    Example:
        >>> compiler = StyleCompiler(StyleConfig(output_style="compressed"))
        >>> compiler.ensure_output_directory()
        >>> compiler.compile().css
        'body{color:red}\\n'
    """

    def __init__(self, config: StyleConfig) -> None:
        """Initialize StyleCompiler.

        Args:
            config: Build configuration.
        """
        self._config = config
        self._state = CompilerState.IDLE

    @property
    def config(self) -> StyleConfig:
        """Get the build configuration."""
        return self._config

    @property
    def state(self) -> CompilerState:
        """Get the current compiler state."""
        return self._state

    def ensure_output_directory(self) -> bool:
        """Create the configured output directory if missing."""
        return ensure_output_directory(self._config.output_path)

    def compile(self) -> CompilationResult:
        """Compile the configured source into the configured output.

        Returns:
            CompilationResult for the written file.

        Raises:
            StyleCompileError: If the transform fails.
            StyleWriteError: If the write fails.
        """
        self._state = CompilerState.COMPILING
        try:
            return compile_stylesheet(
                self._config.source_path,
                self._config.output_path,
                output_style=self._config.output_style,
                include_paths=self._config.include_paths,
                precision=self._config.precision,
                source_comments=self._config.source_comments,
            )
        finally:
            self._state = CompilerState.IDLE
