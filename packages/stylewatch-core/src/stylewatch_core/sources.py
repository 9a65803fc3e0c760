"""Change source abstraction for stylesheet directory events.

This module provides a pluggable abstraction for the stream of filesystem
change notifications that drives recompilation.

Architecture:
- ChangeSource protocol: an iterable of ChangeEvent that can be closed
- WatchdogChangeSource: watchdog-backed, non-terminating until closed
- StaticChangeSource: finite in-memory events (tests, scripted replays)

The watchdog observer thread only enqueues events. Consumers iterate on
their own thread, so every compile runs on the consumer side.
"""

from __future__ import annotations

import enum
import queue
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog
from pydantic import BaseModel, ConfigDict
from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from stylewatch_core.errors import WatcherError

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

logger = structlog.get_logger(__name__)


class ChangeKind(str, enum.Enum):
    """Kind of filesystem change."""

    CREATED = "created"
    MODIFIED = "modified"
    MOVED = "moved"
    DELETED = "deleted"


# watchdog event types that trigger a compile; open/close events are dropped
_EVENT_KINDS: dict[str, ChangeKind] = {
    EVENT_TYPE_CREATED: ChangeKind.CREATED,
    EVENT_TYPE_MODIFIED: ChangeKind.MODIFIED,
    EVENT_TYPE_MOVED: ChangeKind.MOVED,
    EVENT_TYPE_DELETED: ChangeKind.DELETED,
}

# Sentinel that ends WatchdogChangeSource iteration
_STOP = object()


class ChangeEvent(BaseModel):
    """A single change inside the watched directory.

    Attributes:
        kind: What happened to the file.
        path: File that changed (the old name for moves).
        dest_path: New name for moves, None otherwise.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ChangeKind
    path: Path
    dest_path: Path | None = None

    @property
    def filename(self) -> str:
        """Name of the changed file, as reported to the user."""
        return self.path.name


@runtime_checkable
class ChangeSource(Protocol):
    """Protocol for change notification sources.

    Iteration yields ChangeEvent instances lazily. Live sources never stop
    on their own; iteration ends only after close().
    """

    def __iter__(self) -> Iterator[ChangeEvent]:
        """Yield change events as they arrive."""
        ...

    def close(self) -> None:
        """Release the underlying watch handle and end iteration."""
        ...


class StaticChangeSource:
    """Finite change source backed by a list of events.

    Example:
        >>> source = StaticChangeSource(
        ...     [ChangeEvent(kind=ChangeKind.MODIFIED, path=Path("scss/main.scss"))]
        ... )
        >>> [e.filename for e in source]
        ['main.scss']
    """

    def __init__(self, events: Iterable[ChangeEvent] = ()) -> None:
        """Initialize StaticChangeSource.

        Args:
            events: Events to replay, in order.
        """
        self._events = list(events)
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def __iter__(self) -> Iterator[ChangeEvent]:
        for event in self._events:
            if self._closed:
                return
            yield event

    def close(self) -> None:
        self._closed = True


class _QueueingEventHandler(FileSystemEventHandler):
    """Internal handler that converts watchdog events into ChangeEvents."""

    def __init__(self, events: queue.Queue[Any], ignore: frozenset[Path]) -> None:
        super().__init__()
        self._events = events
        self._ignore = ignore

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return

        kind = _EVENT_KINDS.get(event.event_type)
        if kind is None:
            return

        path = _as_path(event.src_path)
        dest_raw = getattr(event, "dest_path", "")
        dest_path = _as_path(dest_raw) if dest_raw else None

        if self._is_ignored(path) and (dest_path is None or self._is_ignored(dest_path)):
            return

        self._events.put(ChangeEvent(kind=kind, path=path, dest_path=dest_path))

    def _is_ignored(self, path: Path) -> bool:
        return path.resolve() in self._ignore


def _as_path(raw: str | bytes) -> Path:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    return Path(raw)


class WatchdogChangeSource:
    """Live change source for a single directory.

    Schedules a non-recursive watchdog observer on the directory and yields
    created, modified, moved and deleted file events. Events for paths in
    ``ignore`` are dropped, which keeps an output file written inside the
    watched directory from re-triggering itself.

    Attributes:
        directory: Directory being watched
        running: Whether the observer is active

    Example:
        >>> with WatchdogChangeSource(Path("src/_includes/scss")) as source:
        ...     for event in source:
        ...         print(event.kind, event.filename)
    """

    def __init__(self, directory: Path | str, *, ignore: Iterable[Path | str] = ()) -> None:
        """Initialize WatchdogChangeSource.

        Args:
            directory: Directory to watch.
            ignore: Paths whose events are dropped.

        Raises:
            WatcherError: If the directory does not exist.
        """
        self._directory = Path(directory)
        if not self._directory.is_dir():
            msg = f"Watch directory does not exist: {self._directory}"
            raise WatcherError(msg)

        self._ignore = frozenset(Path(p).resolve() for p in ignore)
        self._events: queue.Queue[Any] = queue.Queue()
        self._observer: BaseObserver | None = None
        self._closed = False
        self._lock = threading.Lock()
        self._log = logger.bind(directory=str(self._directory))

    @property
    def directory(self) -> Path:
        """Get the watched directory."""
        return self._directory

    @property
    def running(self) -> bool:
        """Whether the observer is currently active."""
        with self._lock:
            return self._observer is not None

    def start(self) -> None:
        """Start the observer. Does nothing once the source is closed.

        Raises:
            WatcherError: If already running or the observer fails to start.
        """
        with self._lock:
            if self._closed:
                return
            if self._observer is not None:
                raise WatcherError("Change source is already running")

            handler = _QueueingEventHandler(self._events, self._ignore)
            observer = Observer()
            observer.schedule(handler, str(self._directory), recursive=False)
            try:
                observer.start()
            except OSError as e:
                msg = f"Failed to watch directory: {self._directory} - {e}"
                raise WatcherError(msg) from e

            self._observer = observer
            self._log.info("watch_started")

    def close(self) -> None:
        """Stop the observer and end any running iteration.

        Safe to call even if not running, and from another thread.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            observer, self._observer = self._observer, None
            # Wakes a consumer blocked in __iter__, started or not
            self._events.put(_STOP)

        if observer is None:
            return

        observer.stop()
        observer.join(timeout=5.0)
        self._log.info("watch_stopped")

    def __iter__(self) -> Iterator[ChangeEvent]:
        if self._closed:
            return
        if not self.running:
            self.start()
        while True:
            item = self._events.get()
            if item is _STOP:
                return
            yield item

    def __enter__(self) -> WatchdogChangeSource:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

