"""CLI error handling for stylewatch-cli.

Wraps stylewatch-core exceptions into user-facing messages with
appropriate exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from rich.markup import escape

from stylewatch_cli.output import error

if TYPE_CHECKING:
    from pydantic import ValidationError as PydanticValidationError
    from stylewatch_core.errors import StylewatchError


# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (stylesheet syntax, invalid config)
EXIT_SYSTEM_ERROR = 2  # System error (missing file, permissions, write failure)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(escape(self.format_message()), highlight=False)


def format_validation_error(err: PydanticValidationError) -> str:
    """Format a pydantic validation error into a user-friendly message.

    Example:
        >>> format_validation_error(err)
        "Invalid options:\\n  - output_style: Input should be 'nested'..."
    """
    lines = ["Invalid options:"]
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")
    return "\n".join(lines)


def exit_code_for(err: StylewatchError) -> int:
    """Map a stylewatch-core exception to a CLI exit code.

    Stylesheet and configuration problems are user errors; directory,
    write and watch failures are system errors.
    """
    from stylewatch_core.errors import ConfigError, StyleCompileError

    if isinstance(err, (StyleCompileError, ConfigError)):
        return EXIT_USER_ERROR
    return EXIT_SYSTEM_ERROR


def handle_stylewatch_error(err: StylewatchError) -> NoReturn:
    """Raise a CLIError for a stylewatch-core exception.

    Raises:
        CLIError: Always raises with the exception message.
    """
    raise CLIError(err.message, exit_code=exit_code_for(err)) from err


def handle_file_not_found(file_path: str) -> NoReturn:
    """Handle a missing configuration file with a helpful suggestion.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(
        f"File not found: {file_path}\n\n"
        "Run 'stylewatch init' to create one, or use --config to specify a path.",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Handle permission errors.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(
        f"Permission denied: Cannot {operation} {path}",
        exit_code=EXIT_SYSTEM_ERROR,
    )
