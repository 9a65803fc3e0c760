"""Custom exceptions for stylewatch-core.

This module defines the exception hierarchy:
- StylewatchError (base)
- OutputDirectoryError
- StyleCompileError
- StyleWriteError
- ConfigError
- WatcherError
"""

from __future__ import annotations


class StylewatchError(Exception):
    """Base exception for all stylewatch operations.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     compiler.compile()
        ... except StylewatchError as e:
        ...     print(f"Stylesheet build failed: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize StylewatchError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class OutputDirectoryError(StylewatchError):
    """Raised when the output stylesheet directory cannot be created.

    Example:
        >>> raise OutputDirectoryError("Cannot create directory", directory="dist/css")
    """

    def __init__(
        self,
        message: str,
        *,
        directory: str | None = None,
        details: dict[str, str] | None = None,
    ) -> None:
        """Initialize OutputDirectoryError.

        Args:
            message: Human-readable error description.
            directory: Directory that could not be created.
            details: Optional additional context.
        """
        merged_details = details or {}
        if directory:
            merged_details["directory"] = directory
        super().__init__(message, details=merged_details)
        self.directory = directory


class StyleCompileError(StylewatchError):
    """Raised when the SCSS source cannot be transformed into CSS.

    Covers syntax errors, unresolved imports and a missing source file.
    No output is written when this is raised.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, str] | None = None,
    ) -> None:
        """Initialize StyleCompileError.

        Args:
            message: Human-readable error description (compiler output).
            source: Path of the stylesheet being compiled.
            details: Optional additional context.
        """
        merged_details = details or {}
        if source:
            merged_details["source"] = source
        super().__init__(message, details=merged_details)
        self.source = source


class StyleWriteError(StylewatchError):
    """Raised when compiled CSS cannot be written to the output path."""

    def __init__(
        self,
        message: str,
        *,
        output: str | None = None,
        details: dict[str, str] | None = None,
    ) -> None:
        """Initialize StyleWriteError.

        Args:
            message: Human-readable error description.
            output: Output path that failed.
            details: Optional additional context.
        """
        merged_details = details or {}
        if output:
            merged_details["output"] = output
        super().__init__(message, details=merged_details)
        self.output = output


class ConfigError(StylewatchError):
    """Raised when a stylewatch.yaml file cannot be read or is invalid."""


class WatcherError(StylewatchError):
    """Error in watcher operation.

    Raised when:
    - Watch directory does not exist
    - Change source is started while already running
    - Observer fails to start
    """
