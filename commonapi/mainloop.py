"""Hooks that connect CommonAPI dispatch sources, watches and timeouts to a main loop."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Callable, Generic, Sequence, TypeVar

TIMEOUT_INFINITE = 2**63 - 1
TIMEOUT_NONE = 0

DEFAULT_CONTEXT_NAME = "COMMONAPI_DEFAULT_MAINLOOP_CONTEXT"


class DispatchPriority(IntEnum):
    """Priority with which a main loop should handle a source."""

    VERY_HIGH = 0
    HIGH = 1
    DEFAULT = 2
    LOW = 3
    VERY_LOW = 4


def current_time_ms() -> int:
    """Return a monotonic clock reading in milliseconds."""
    return time.monotonic_ns() // 1_000_000


class DispatchSource(ABC):
    """An element that periodically needs to be dispatched."""

    @abstractmethod
    def prepare(self) -> tuple[bool, int]:
        """Called before polling; return ``(ready, timeout_ms)``.

        ``timeout_ms`` is the longest time the loop may wait before asking again.
        """

    @abstractmethod
    def check(self) -> bool:
        """Called after polling; return whether the source is ready to be dispatched."""

    @abstractmethod
    def dispatch(self) -> bool:
        """Dispatch the source; return whether more remains to dispatch."""


class Watch(ABC):
    """An element that manages a file descriptor."""

    @abstractmethod
    def dispatch(self, event_flags: int) -> None:
        """Handle the events in ``event_flags`` that occurred on the descriptor."""

    @abstractmethod
    def associated_file_descriptor(self) -> tuple[int, int]:
        """Return ``(fd, events)``: the descriptor and the poll events it waits for."""

    @abstractmethod
    def dependent_dispatch_sources(self) -> Sequence[DispatchSource]:
        """Return the dispatch sources that depend on data from this descriptor."""


class Timeout(ABC):
    """A timeout that limits how long the loop may wait in poll."""

    @abstractmethod
    def dispatch(self) -> bool:
        """Handle expiry; return True to reschedule, False to remove."""

    @abstractmethod
    def timeout_interval(self) -> int:
        """Interval in ms; TIMEOUT_INFINITE means never, TIMEOUT_NONE immediately."""

    @abstractmethod
    def ready_time(self) -> int:
        """Point in time, in ms of ``current_time_ms``, of the next expiry."""


_Entry = TypeVar("_Entry")


class _Subscription(Generic[_Entry]):
    """Opaque handle returned by the subscribe methods."""

    __slots__ = ("entry",)

    def __init__(self, entry: _Entry) -> None:
        self.entry = entry


def _subscribe(listeners: list, entry: object) -> _Subscription:
    subscription = _Subscription(entry)
    listeners.insert(0, subscription)
    return subscription


def _unsubscribe(listeners: list, subscription: _Subscription) -> None:
    for position, candidate in enumerate(listeners):
        if candidate is subscription:
            del listeners[position]
            return
    raise ValueError("unknown or already removed subscription")


class MainLoopContext:
    """Notifies main loop implementations about sources, watches, timeouts and wakeups.

    Listeners subscribed later are notified first.
    """

    def __init__(self, name: str = DEFAULT_CONTEXT_NAME) -> None:
        self._name = name
        self._dispatch_source_listeners: list[_Subscription] = []
        self._watch_listeners: list[_Subscription] = []
        self._timeout_listeners: list[_Subscription] = []
        self._wakeup_listeners: list[_Subscription] = []

    @property
    def name(self) -> str:
        return self._name

    def subscribe_for_dispatch_sources(
        self,
        added_callback: Callable[[DispatchSource, DispatchPriority], None],
        removed_callback: Callable[[DispatchSource], None],
    ) -> _Subscription:
        """Register callbacks for dispatch sources being added or removed."""
        return _subscribe(self._dispatch_source_listeners, (added_callback, removed_callback))

    def subscribe_for_watches(
        self,
        added_callback: Callable[[Watch, DispatchPriority], None],
        removed_callback: Callable[[Watch], None],
    ) -> _Subscription:
        """Register callbacks for watches being added or removed."""
        return _subscribe(self._watch_listeners, (added_callback, removed_callback))

    def subscribe_for_timeouts(
        self,
        added_callback: Callable[[Timeout, DispatchPriority], None],
        removed_callback: Callable[[Timeout], None],
    ) -> _Subscription:
        """Register callbacks for timeouts being added or removed."""
        return _subscribe(self._timeout_listeners, (added_callback, removed_callback))

    def subscribe_for_wakeup_events(self, wakeup_callback: Callable[[], None]) -> _Subscription:
        """Register a callback for wakeups that must interrupt polling."""
        return _subscribe(self._wakeup_listeners, wakeup_callback)

    def unsubscribe_for_dispatch_sources(self, subscription: _Subscription) -> None:
        """Remove dispatch source callbacks; raise ValueError for an unknown handle."""
        _unsubscribe(self._dispatch_source_listeners, subscription)

    def unsubscribe_for_watches(self, subscription: _Subscription) -> None:
        """Remove watch callbacks; raise ValueError for an unknown handle."""
        _unsubscribe(self._watch_listeners, subscription)

    def unsubscribe_for_timeouts(self, subscription: _Subscription) -> None:
        """Remove timeout callbacks; raise ValueError for an unknown handle."""
        _unsubscribe(self._timeout_listeners, subscription)

    def unsubscribe_for_wakeup_events(self, subscription: _Subscription) -> None:
        """Remove a wakeup callback; raise ValueError for an unknown handle."""
        _unsubscribe(self._wakeup_listeners, subscription)

    def register_dispatch_source(
        self, dispatch_source: DispatchSource, priority: DispatchPriority = DispatchPriority.DEFAULT
    ) -> None:
        """Tell every listener about a new dispatch source."""
        for subscription in list(self._dispatch_source_listeners):
            subscription.entry[0](dispatch_source, priority)

    def deregister_dispatch_source(self, dispatch_source: DispatchSource) -> None:
        """Tell every listener that a dispatch source was removed."""
        for subscription in list(self._dispatch_source_listeners):
            subscription.entry[1](dispatch_source)

    def register_watch(
        self, watch: Watch, priority: DispatchPriority = DispatchPriority.DEFAULT
    ) -> None:
        """Tell every listener about a new watch."""
        for subscription in list(self._watch_listeners):
            subscription.entry[0](watch, priority)

    def deregister_watch(self, watch: Watch) -> None:
        """Tell every listener that a watch was removed."""
        for subscription in list(self._watch_listeners):
            subscription.entry[1](watch)

    def register_timeout_source(
        self, timeout: Timeout, priority: DispatchPriority = DispatchPriority.DEFAULT
    ) -> None:
        """Tell every listener about a new timeout."""
        for subscription in list(self._timeout_listeners):
            subscription.entry[0](timeout, priority)

    def deregister_timeout_source(self, timeout: Timeout) -> None:
        """Tell every listener that a timeout was removed."""
        for subscription in list(self._timeout_listeners):
            subscription.entry[1](timeout)

    def wakeup(self) -> None:
        """Tell every wakeup listener that polling must be interrupted."""
        for subscription in list(self._wakeup_listeners):
            subscription.entry()

    def is_initialized(self) -> bool:
        """Return whether anyone listens for dispatch sources or watches."""
        return bool(self._dispatch_source_listeners or self._watch_listeners)