"""Unit tests for change sources.

Tests cover:
- StaticChangeSource replay and close semantics
- watchdog event filtering and conversion
- WatchdogChangeSource lifecycle
"""

from __future__ import annotations

import queue
import threading
import time
from pathlib import Path
from typing import Any

import pytest
from watchdog.events import (
    DirModifiedEvent,
    FileClosedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from stylewatch_core.errors import WatcherError
from stylewatch_core.sources import (
    ChangeEvent,
    ChangeKind,
    ChangeSource,
    StaticChangeSource,
    WatchdogChangeSource,
    _QueueingEventHandler,
)


def _drain(events: queue.Queue[Any]) -> list[ChangeEvent]:
    drained = []
    while not events.empty():
        drained.append(events.get_nowait())
    return drained


class TestChangeEvent:
    """Tests for the ChangeEvent model."""

    def test_filename(self) -> None:
        """filename should be the changed file's name."""
        event = ChangeEvent(kind=ChangeKind.MODIFIED, path=Path("scss/_nav.scss"))
        assert event.filename == "_nav.scss"

    def test_kind_accepts_string(self) -> None:
        """kind should coerce from its string value."""
        event = ChangeEvent(kind="deleted", path=Path("a.scss"))  # type: ignore[arg-type]
        assert event.kind is ChangeKind.DELETED
        assert event.dest_path is None


class TestStaticChangeSource:
    """Tests for StaticChangeSource."""

    def test_satisfies_protocol(self) -> None:
        """StaticChangeSource should satisfy ChangeSource."""
        assert isinstance(StaticChangeSource(), ChangeSource)

    def test_replays_events_in_order(self) -> None:
        """Events should be yielded in the given order."""
        events = [
            ChangeEvent(kind=ChangeKind.CREATED, path=Path("a.scss")),
            ChangeEvent(kind=ChangeKind.MODIFIED, path=Path("b.scss")),
        ]

        assert list(StaticChangeSource(events)) == events

    def test_close_ends_iteration(self) -> None:
        """close() during iteration should stop further events."""
        source = StaticChangeSource(
            ChangeEvent(kind=ChangeKind.MODIFIED, path=Path(f"{i}.scss")) for i in range(3)
        )

        seen = []
        for event in source:
            seen.append(event)
            source.close()

        assert len(seen) == 1
        assert source.closed


class TestQueueingEventHandler:
    """Tests for watchdog event filtering."""

    @pytest.fixture
    def events(self) -> queue.Queue[Any]:
        return queue.Queue()

    def test_forwards_file_events(self, events: queue.Queue[Any], tmp_path: Path) -> None:
        """Created, modified and deleted file events should be forwarded."""
        handler = _QueueingEventHandler(events, frozenset())
        path = str(tmp_path / "main.scss")

        handler.dispatch(FileCreatedEvent(path))
        handler.dispatch(FileModifiedEvent(path))
        handler.dispatch(FileDeletedEvent(path))

        kinds = [event.kind for event in _drain(events)]
        assert kinds == [ChangeKind.CREATED, ChangeKind.MODIFIED, ChangeKind.DELETED]

    def test_forwards_moves_with_destination(
        self, events: queue.Queue[Any], tmp_path: Path
    ) -> None:
        """Moved events should carry the destination path."""
        handler = _QueueingEventHandler(events, frozenset())
        src = tmp_path / "old.scss"
        dest = tmp_path / "new.scss"

        handler.dispatch(FileMovedEvent(str(src), str(dest)))

        (event,) = _drain(events)
        assert event.kind is ChangeKind.MOVED
        assert event.path == src
        assert event.dest_path == dest

    def test_decodes_bytes_paths(self, events: queue.Queue[Any], tmp_path: Path) -> None:
        """Byte paths from the observer should be decoded."""
        handler = _QueueingEventHandler(events, frozenset())
        path = tmp_path / "main.scss"

        handler.dispatch(FileModifiedEvent(str(path).encode("utf-8")))

        (event,) = _drain(events)
        assert event.path == path

    def test_drops_directory_events(self, events: queue.Queue[Any], tmp_path: Path) -> None:
        """Directory events should not trigger compiles."""
        handler = _QueueingEventHandler(events, frozenset())

        handler.dispatch(DirModifiedEvent(str(tmp_path)))

        assert events.empty()

    def test_drops_close_events(self, events: queue.Queue[Any], tmp_path: Path) -> None:
        """Close events produced by reading the source should be ignored."""
        handler = _QueueingEventHandler(events, frozenset())

        handler.dispatch(FileClosedEvent(str(tmp_path / "main.scss")))

        assert events.empty()

    def test_drops_ignored_paths(self, events: queue.Queue[Any], tmp_path: Path) -> None:
        """Events for ignored paths should be dropped."""
        output = tmp_path / "main.css"
        handler = _QueueingEventHandler(events, frozenset({output.resolve()}))

        handler.dispatch(FileModifiedEvent(str(output)))
        handler.dispatch(FileModifiedEvent(str(tmp_path / "main.scss")))

        (event,) = _drain(events)
        assert event.filename == "main.scss"

    def test_keeps_move_onto_watched_file(
        self, events: queue.Queue[Any], tmp_path: Path
    ) -> None:
        """A move out of an ignored path to a source file should still count."""
        ignored = tmp_path / "main.css"
        handler = _QueueingEventHandler(events, frozenset({ignored.resolve()}))

        handler.dispatch(FileMovedEvent(str(ignored), str(tmp_path / "main.scss")))

        assert len(_drain(events)) == 1


class TestWatchdogChangeSource:
    """Tests for WatchdogChangeSource lifecycle."""

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """A missing directory should raise WatcherError."""
        with pytest.raises(WatcherError) as exc_info:
            WatchdogChangeSource(tmp_path / "missing")

        assert "does not exist" in str(exc_info.value)

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        """WatchdogChangeSource should satisfy ChangeSource."""
        assert isinstance(WatchdogChangeSource(tmp_path), ChangeSource)

    def test_start_and_close(self, tmp_path: Path) -> None:
        """start() and close() should toggle running."""
        source = WatchdogChangeSource(tmp_path)
        assert not source.running

        source.start()
        try:
            assert source.running
        finally:
            source.close()

        assert not source.running

    def test_start_twice_raises(self, tmp_path: Path) -> None:
        """Starting a running source should raise WatcherError."""
        with WatchdogChangeSource(tmp_path) as source:
            with pytest.raises(WatcherError) as exc_info:
                source.start()

        assert "already running" in str(exc_info.value).lower()

    def test_close_when_not_running_is_safe(self, tmp_path: Path) -> None:
        """close() should be safe to call repeatedly."""
        source = WatchdogChangeSource(tmp_path)
        source.close()
        source.close()
        assert not source.running

    def test_iteration_after_close_is_empty(self, tmp_path: Path) -> None:
        """A closed source should yield nothing and not start an observer."""
        source = WatchdogChangeSource(tmp_path)
        source.close()

        assert list(source) == []
        assert not source.running

    def test_directory_property(self, tmp_path: Path) -> None:
        """directory should return the configured path."""
        assert WatchdogChangeSource(str(tmp_path)).directory == tmp_path

    def test_start_after_close_does_nothing(self, tmp_path: Path) -> None:
        """A closed source should never launch an observer."""
        source = WatchdogChangeSource(tmp_path)
        source.close()

        source.start()

        assert not source.running

    def test_close_racing_start_ends_iteration(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """close() landing just before iteration starts the observer must not hang."""
        source = WatchdogChangeSource(tmp_path)
        real_start = source.start

        def close_then_start() -> None:
            source.close()
            real_start()

        monkeypatch.setattr(source, "start", close_then_start)

        assert list(source) == []
        assert not source.running

    def test_close_ends_blocked_iteration(self, tmp_path: Path) -> None:
        """close() from another thread should end a consumer waiting for events."""
        source = WatchdogChangeSource(tmp_path)
        received: list[ChangeEvent] = []
        consumer = threading.Thread(target=lambda: received.extend(source), daemon=True)
        consumer.start()

        deadline = time.monotonic() + 5.0
        while not source.running and time.monotonic() < deadline:
            time.sleep(0.01)
        source.close()
        consumer.join(timeout=5.0)

        assert not consumer.is_alive()
        assert not source.running
