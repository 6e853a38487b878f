"""Base classes for client proxies and service stubs."""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from concurrent.futures import Future
from enum import IntEnum
from typing import Any, Generic, Optional, TypeVar

from commonapi.address import Address
from commonapi.event import Event


class Proxy(ABC):
    """Client-side handle to a remote service instance.

    ``completion_future`` resolves once the proxy is closed.
    """

    def __init__(self, address: Optional[Address] = None) -> None:
        self.address = address if address is not None else Address()
        self._completed: Future[None] = Future()

    def completion_future(self) -> Future[None]:
        """Return a future that completes when the proxy is closed."""
        return self._completed

    def close(self) -> None:
        """Release the proxy and complete its future; repeated calls do nothing."""
        if not self._completed.done():
            self._completed.set_result(None)

    def __enter__(self) -> "Proxy":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @abstractmethod
    def is_available(self) -> bool:
        """Return whether the remote service is currently available."""

    @abstractmethod
    def is_available_blocking(self) -> bool:
        """Wait until availability is known and return it."""

    @property
    @abstractmethod
    def proxy_status_event(self) -> Event:
        """The event that reports availability changes."""


class StubAdapter:
    """Binding-side adapter that exposes a stub under an address."""

    def __init__(self, address: Optional[Address] = None) -> None:
        self.address = address if address is not None else Address()


class StubBase(ABC):
    """Common base of all service stubs."""

    @abstractmethod
    def has_element(self, element_id: int) -> bool:
        """Return whether the stub provides the element with ``element_id``."""


AdapterT = TypeVar("AdapterT", bound=StubAdapter)
HandlerT = TypeVar("HandlerT")


class Stub(StubBase, Generic[AdapterT, HandlerT]):
    """A service stub bound to a stub adapter, held only weakly."""

    def __init__(self) -> None:
        self._stub_adapter_ref: Optional[weakref.ReferenceType[AdapterT]] = None

    def _remember_stub_adapter(self, stub_adapter: AdapterT) -> None:
        if not isinstance(stub_adapter, StubAdapter):
            raise TypeError("stub adapter must derive from StubAdapter")
        self._stub_adapter_ref = weakref.ref(stub_adapter)

    @abstractmethod
    def init_stub_adapter(self, stub_adapter: AdapterT) -> HandlerT:
        """Bind ``stub_adapter`` and return the remote event handler."""

    def stub_adapter(self) -> Optional[AdapterT]:
        """Return the bound adapter, or None if none is bound or it is gone."""
        if self._stub_adapter_ref is None:
            return None
        return self._stub_adapter_ref()


class SelectiveBroadcastSubscriptionEvent(IntEnum):
    """Change of a client's subscription to a selective broadcast."""

    SUBSCRIBED = 0
    UNSUBSCRIBED = 1