"""Shared test fixtures for stylewatch-cli tests.

Provides CliRunner fixtures and a throwaway SCSS project laid out at
the default paths.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from stylewatch_cli import output

CONFIG_FILENAME = "stylewatch.yaml"

MAIN_SCSS = """\
@import "variables";

body {
  color: $text-color;
}
"""

VARIABLES_SCSS = "$text-color: red;\n"


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Undo logging and console changes made by the CLI group callback."""
    original_console = output.console
    yield
    output.console = original_console
    structlog.reset_defaults()
    logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance whose working directory is a fresh temp dir.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def scss_project(isolated_runner: CliRunner) -> Path:
    """Write main.scss and a partial at the default source location.

    Returns:
        Path to the root SCSS file (relative to the working directory).
    """
    directory = Path("src/_includes/scss")
    directory.mkdir(parents=True)
    (directory / "main.scss").write_text(MAIN_SCSS)
    (directory / "_variables.scss").write_text(VARIABLES_SCSS)
    return directory / "main.scss"


@pytest.fixture
def create_config(isolated_runner: CliRunner) -> Callable[..., Path]:
    """Factory fixture to create stylewatch.yaml files with custom content."""

    def _create(content: str, filename: str = CONFIG_FILENAME) -> Path:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _create
