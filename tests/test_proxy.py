import gc

import pytest

from commonapi.address import Address
from commonapi.event import Event
from commonapi.proxy import (
    Proxy,
    SelectiveBroadcastSubscriptionEvent,
    Stub,
    StubAdapter,
    StubBase,
)


class FakeProxy(Proxy):
    def __init__(self, address=None, available=True, event=None):
        super().__init__(address)
        self._available = available
        self._event = event if event is not None else Event()

    def is_available(self):
        return self._available

    def is_available_blocking(self):
        return self._available

    @property
    def proxy_status_event(self):
        return self._event


class FakeStub(Stub):
    def __init__(self, elements):
        super().__init__()
        self._elements = set(elements)

    def has_element(self, element_id):
        return element_id in self._elements

    def init_stub_adapter(self, stub_adapter):
        self._remember_stub_adapter(stub_adapter)
        return ("handler", stub_adapter.address)


def test_proxy_is_abstract():
    with pytest.raises(TypeError):
        Proxy()


def test_stub_base_is_abstract():
    with pytest.raises(TypeError):
        StubBase()


def test_proxy_keeps_address():
    address = Address("local:commonapi.Test:v1_0:test")
    proxy = FakeProxy(address)
    assert proxy.address == address
    assert str(proxy.address) == "local:commonapi.Test:v1_0:test"


def test_proxy_default_address_is_empty():
    proxy = FakeProxy()
    assert Address.__str__(proxy.address) == "::"


def test_completion_future_resolves_on_close():
    proxy = FakeProxy()
    future = Proxy.completion_future(proxy)
    assert future.done() is False
    Proxy.close(proxy)
    assert future.done() is True
    assert future.result() is None
    Proxy.close(proxy)
    assert Proxy.completion_future(proxy).done() is True


def test_context_manager_closes_proxy():
    with FakeProxy() as proxy:
        future = Proxy.completion_future(proxy)
        assert future.done() is False
    assert future.done() is True


def test_availability_reported():
    address = Address("local:commonapi.Test:v1_0:test")
    unavailable = FakeProxy(address, available=False)
    available = FakeProxy(address, available=True)
    assert unavailable.is_available() is False
    assert available.is_available_blocking() is True
    assert str(available.address) == "local:commonapi.Test:v1_0:test"


def test_proxy_status_event_notifies():
    event = Event()
    proxy = FakeProxy(event=event)
    seen = []
    key = proxy.proxy_status_event.subscribe(seen.append)
    event.notify_listeners("AVAILABLE")
    assert key == 0
    assert seen == ["AVAILABLE"]


def test_stub_has_element():
    stub = FakeStub([1, 2])
    assert stub.has_element(1) is True
    assert stub.has_element(3) is False
    assert Stub.stub_adapter(stub) is None


def test_stub_adapter_initially_none():
    assert Stub.stub_adapter(FakeStub([])) is None


def test_stub_adapter_bound_and_weakly_held():
    stub = FakeStub([])
    address = Address("local:commonapi.Test:v1_0:test")
    adapter = StubAdapter(address)
    handler = stub.init_stub_adapter(adapter)
    assert handler == ("handler", address)
    assert stub.stub_adapter() is adapter
    del adapter
    gc.collect()
    assert stub.stub_adapter() is None


def test_stub_rejects_non_adapter():
    stub = FakeStub([])
    with pytest.raises(TypeError):
        stub.init_stub_adapter(object())
    assert Stub.stub_adapter(stub) is None


def test_selective_broadcast_event_values():
    assert SelectiveBroadcastSubscriptionEvent(0) is SelectiveBroadcastSubscriptionEvent.SUBSCRIBED
    assert SelectiveBroadcastSubscriptionEvent(1) is SelectiveBroadcastSubscriptionEvent.UNSUBSCRIBED
    with pytest.raises(ValueError):
        SelectiveBroadcastSubscriptionEvent(2)