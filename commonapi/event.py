"""Events that fan out notifications to subscribed listeners."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

Listener = Callable[..., None]
ErrorListener = Callable[[Any], None]


def _is_success(status: Any) -> bool:
    return getattr(status, "name", status) == "SUCCESS"


class Event:
    """An event to which listeners subscribe and that notifies them in order.

    Subscriptions and unsubscriptions take effect at the next notification;
    until then they are held as pending. Subscription keys are consecutive
    integers starting at 0. Listeners are called in subscription order.

    The lifecycle hooks may be overridden in a subclass or supplied as
    callables when the event is created.

    Listeners must not subscribe new proxies or register services, and must not
    trigger another notification of the same event, which would block.
    """

    def __init__(
        self,
        *,
        first_listener_added: Optional[Callable[[Listener], None]] = None,
        listener_added: Optional[Callable[[Listener, int], None]] = None,
        listener_removed: Optional[Callable[[Listener, int], None]] = None,
        last_listener_removed: Optional[Callable[[Listener], None]] = None,
    ) -> None:
        self._subscriptions: dict[int, tuple[Listener, Optional[ErrorListener]]] = {}
        self._next_subscription = 0
        self._pending_subscriptions: dict[int, tuple[Listener, Optional[ErrorListener]]] = {}
        self._pending_unsubscriptions: set[int] = set()
        self._notification_lock = threading.Lock()
        self._subscription_lock = threading.Lock()
        self._first_listener_added_hook = first_listener_added
        self._listener_added_hook = listener_added
        self._listener_removed_hook = listener_removed
        self._last_listener_removed_hook = last_listener_removed

    def subscribe(
        self, listener: Listener, error_listener: Optional[ErrorListener] = None
    ) -> int:
        """Add a listener, with an optional error listener, and return its key."""
        with self._subscription_lock:
            subscription = self._next_subscription
            self._next_subscription += 1
            is_first = not self._pending_subscriptions and len(
                self._pending_unsubscriptions
            ) == len(self._subscriptions)
            self._pending_subscriptions[subscription] = (listener, error_listener)

        if is_first:
            if self._pending_unsubscriptions:
                self.on_last_listener_removed(listener)
            self.on_first_listener_added(listener)
        self.on_listener_added(listener, subscription)
        return subscription

    def unsubscribe(self, subscription: int) -> None:
        """Remove the listener registered under ``subscription``; unknown keys are ignored."""
        is_last = False
        has_unsubscribed = False
        listener: Optional[Listener] = None

        with self._subscription_lock:
            if subscription in self._subscriptions:
                if subscription not in self._pending_unsubscriptions:
                    if self._pending_subscriptions.pop(subscription, None) is None:
                        self._pending_unsubscriptions.add(subscription)
                        listener = self._subscriptions[subscription][0]
                        has_unsubscribed = True
                    is_last = len(self._pending_unsubscriptions) == len(self._subscriptions)
            elif subscription in self._pending_subscriptions:
                listener = self._pending_subscriptions.pop(subscription)[0]
                is_last = len(self._pending_unsubscriptions) == len(self._subscriptions)
                has_unsubscribed = True
            is_last = is_last and not self._pending_subscriptions

        if has_unsubscribed:
            self.on_listener_removed(listener, subscription)
            if is_last:
                self.on_last_listener_removed(listener)

    def _commit_pending(self) -> list[tuple[int, tuple[Listener, Optional[ErrorListener]]]]:
        with self._subscription_lock:
            for key in self._pending_unsubscriptions:
                self._subscriptions.pop(key, None)
            self._pending_unsubscriptions.clear()
            for key, listeners in self._pending_subscriptions.items():
                self._subscriptions.setdefault(key, listeners)
            self._pending_subscriptions.clear()
            return sorted(self._subscriptions.items(), key=lambda item: item[0])

    def notify_listeners(self, *args: Any) -> None:
        """Call every listener with ``args``."""
        with self._notification_lock:
            for _, (listener, _error) in self._commit_pending():
                listener(*args)

    def notify_specific_listener(self, subscription: int, *args: Any) -> None:
        """Call only the listener registered under ``subscription``."""
        with self._notification_lock:
            for key, (listener, _error) in self._commit_pending():
                if key == subscription:
                    listener(*args)

    def notify_specific_error(self, subscription: int, status: Any) -> None:
        """Pass ``status`` to one error listener; a non-success status drops that subscription."""
        with self._notification_lock:
            for key, (_listener, error_listener) in self._commit_pending():
                if key == subscription and error_listener is not None:
                    error_listener(status)

        if not _is_success(status):
            with self._subscription_lock:
                if subscription in self._subscriptions:
                    if subscription not in self._pending_unsubscriptions:
                        if self._pending_subscriptions.pop(subscription, None) is None:
                            self._pending_unsubscriptions.add(subscription)
                else:
                    self._pending_subscriptions.pop(subscription, None)

    def notify_error_listeners(self, status: Any) -> None:
        """Pass ``status`` to every error listener."""
        with self._notification_lock:
            for _, (_listener, error_listener) in self._commit_pending():
                if error_listener is not None:
                    error_listener(status)

    def on_first_listener_added(self, listener: Listener) -> None:
        """Hook called when the event goes from no listeners to one."""
        if self._first_listener_added_hook is not None:
            self._first_listener_added_hook(listener)

    def on_listener_added(self, listener: Listener, subscription: int) -> None:
        """Hook called after every subscription."""
        if self._listener_added_hook is not None:
            self._listener_added_hook(listener, subscription)

    def on_listener_removed(self, listener: Listener, subscription: int) -> None:
        """Hook called after every effective unsubscription."""
        if self._listener_removed_hook is not None:
            self._listener_removed_hook(listener, subscription)

    def on_last_listener_removed(self, listener: Listener) -> None:
        """Hook called when the last listener has gone."""
        if self._last_listener_removed_hook is not None:
            self._last_listener_removed_hook(listener)