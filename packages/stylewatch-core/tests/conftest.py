"""Shared pytest fixtures for stylewatch-core tests.

This module provides common fixtures used across unit and integration
tests: a throwaway SCSS project layout and matching configurations.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import structlog

from stylewatch_core.config import StyleConfig

MAIN_SCSS = """\
@import "variables";

body {
  color: $text-color;

  a {
    color: $link-color;
  }
}
"""

VARIABLES_SCSS = """\
$text-color: red;
$link-color: #0b0c0c;
"""


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def scss_dir(tmp_path: Path) -> Path:
    """Create an SCSS directory with an entry file and a partial.

    Returns:
        Path to the directory holding main.scss and _variables.scss.
    """
    directory = tmp_path / "src" / "_includes" / "scss"
    directory.mkdir(parents=True)
    (directory / "main.scss").write_text(MAIN_SCSS)
    (directory / "_variables.scss").write_text(VARIABLES_SCSS)
    return directory


@pytest.fixture
def source_file(scss_dir: Path) -> Path:
    """Return the root SCSS file."""
    return scss_dir / "main.scss"


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    """Return an output path whose directory does not exist yet."""
    return tmp_path / "dist" / "css" / "main.css"


@pytest.fixture
def style_config(source_file: Path, output_file: Path) -> StyleConfig:
    """Return a compressed-output configuration for the SCSS project."""
    return StyleConfig(
        source_path=source_file,
        output_path=output_file,
        output_style="compressed",
    )
