"""Tests for the stylewatch watch command.

The watchdog-backed source is replaced with in-memory sources so the
command returns once the scripted events are exhausted.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest

from stylewatch_cli.commands.watch import watch
from stylewatch_core import watcher as watcher_module
from stylewatch_core.sources import ChangeEvent, ChangeKind, StaticChangeSource
from stylewatch_core.watcher import StyleWatcher

DEFAULT_OUTPUT = Path("src/css/main.css")


class EditingChangeSource:
    """Change source that rewrites a file before yielding each event."""

    def __init__(self, edits: list[tuple[Path, str]]) -> None:
        self.edits = edits
        self.closed = False

    def __iter__(self) -> Iterator[ChangeEvent]:
        for path, content in self.edits:
            path.write_text(content)
            yield ChangeEvent(kind=ChangeKind.MODIFIED, path=path)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def use_source(monkeypatch: pytest.MonkeyPatch) -> Callable[[Any], None]:
    """Make StyleWatcher consume the given source instead of watchdog."""

    def _use(source: Any) -> None:
        monkeypatch.setattr(
            watcher_module,
            "WatchdogChangeSource",
            lambda *args, **kwargs: source,
        )

    return _use


class TestWatchCommand:
    """Tests for the watch loop through the CLI."""

    def test_startup_compile(
        self,
        isolated_runner: CliRunner,
        scss_project: Path,
        use_source: Callable[[Any], None],
    ) -> None:
        """Test the CSS is built before any change arrives."""
        use_source(StaticChangeSource())

        result = isolated_runner.invoke(watch, ["--style", "compressed"])

        assert result.exit_code == 0, result.output
        assert DEFAULT_OUTPUT.read_text() == "body{color:red}\n"
        assert "Watching src/_includes/scss for changes" in result.output
        assert result.output.count("CSS file saved") == 1

    def test_each_change_recompiles(
        self,
        isolated_runner: CliRunner,
        scss_project: Path,
        use_source: Callable[[Any], None],
    ) -> None:
        """Test every event produces one more compile."""
        events = [
            ChangeEvent(kind=ChangeKind.MODIFIED, path=scss_project),
            ChangeEvent(kind=ChangeKind.CREATED, path=scss_project.parent / "_new.scss"),
        ]
        use_source(StaticChangeSource(events))

        result = isolated_runner.invoke(watch)

        assert result.exit_code == 0
        assert result.output.count("CSS file saved") == 3

    def test_edit_updates_output(
        self,
        isolated_runner: CliRunner,
        scss_project: Path,
        use_source: Callable[[Any], None],
    ) -> None:
        """Test an edited partial is reflected in the output."""
        partial = scss_project.parent / "_variables.scss"
        use_source(EditingChangeSource([(partial, "$text-color: blue;\n")]))

        result = isolated_runner.invoke(watch, ["--style", "compressed"])

        assert result.exit_code == 0
        assert DEFAULT_OUTPUT.read_text() == "body{color:blue}\n"

    def test_change_error_keeps_watching(
        self,
        isolated_runner: CliRunner,
        scss_project: Path,
        use_source: Callable[[Any], None],
    ) -> None:
        """Test a broken edit is reported and later edits still compile."""
        good = scss_project.read_text()
        use_source(
            EditingChangeSource(
                [
                    (scss_project, "body {"),
                    (scss_project, good.replace("$text-color", "green")),
                ]
            )
        )

        result = isolated_runner.invoke(watch, ["--style", "compressed"])

        assert result.exit_code == 0
        assert "✗" in result.output
        assert DEFAULT_OUTPUT.read_text() == "body{color:green}\n"

    def test_startup_error_exit_code(
        self,
        isolated_runner: CliRunner,
        scss_project: Path,
        use_source: Callable[[Any], None],
    ) -> None:
        """Test a broken stylesheet at startup exits 1."""
        scss_project.write_text("body {")
        use_source(StaticChangeSource())

        result = isolated_runner.invoke(watch)

        assert result.exit_code == 1
        assert not DEFAULT_OUTPUT.exists()

    def test_keyboard_interrupt(
        self,
        isolated_runner: CliRunner,
        scss_project: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test Ctrl+C stops watching cleanly."""

        def interrupted(self: StyleWatcher) -> None:
            raise KeyboardInterrupt

        monkeypatch.setattr(StyleWatcher, "run", interrupted)

        result = isolated_runner.invoke(watch)

        assert result.exit_code == 0
        assert "Stopped watching." in result.output

    def test_missing_config_exit_code(self, isolated_runner: CliRunner) -> None:
        """Test an explicit --config that does not exist exits 2."""
        result = isolated_runner.invoke(watch, ["-c", "missing.yaml"])

        assert result.exit_code == 2
