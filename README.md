# commonapi

Building blocks for a service-oriented middleware runtime. The package has
no dependencies outside the standard library.

## Modules

- `commonapi.address`
  - `Address`: a domain, a versioned interface and an instance.
    `Address("domain:interface:vMAJOR_MINOR:instance")` or
    `Address("domain:interface:instance")` parses a string; without a
    version the interface gets `v1_0`. `Address.from_parts(domain,
    interface, instance)` builds one from three parts, and `set_address()`
    replaces all parts from a string. `str(address)` (also the `address`
    property) gives `domain:interface:instance`. Addresses compare equal,
    order and hash by their three parts.
  - `InvalidAddressError` (a `ValueError`) is raised for a malformed
    address, after the error has been logged.
- `commonapi.version` – `Version(major, minor)`, an ordered dataclass whose
  numbers must fit an unsigned 32-bit integer (`ValueError` otherwise);
  `str(Version(1, 2))` is `v1_2`.
- `commonapi.event` – `Event`, a thread-safe event. `subscribe(listener,
  error_listener=None)` returns consecutive integer keys from 0;
  `unsubscribe(key)` ignores unknown keys. Subscriptions and
  unsubscriptions take effect at the next notification. Notification
  methods: `notify_listeners(*args)`, `notify_specific_listener(key,
  *args)`, `notify_error_listeners(status)` and
  `notify_specific_error(key, status)`; the last drops the subscription
  when the status is not `SUCCESS` (a value or an enum member of that
  name). The hooks `on_first_listener_added`, `on_listener_added`,
  `on_listener_removed` and `on_last_listener_removed` can be overridden
  or passed as keyword callables to the constructor.
- `commonapi.proxy`
  - `Proxy`: abstract client handle with an `address`, abstract
    `is_available()`, `is_available_blocking()` and `proxy_status_event`.
    `completion_future()` returns a `concurrent.futures.Future` that
    completes on `close()`; a proxy is also a context manager that closes
    on exit.
  - `StubAdapter` (carries an `address`), `StubBase` (abstract
    `has_element(element_id)`) and `Stub`, whose abstract
    `init_stub_adapter(adapter)` binds an adapter; `stub_adapter()` returns
    it while it is alive, held only weakly, or `None`.
  - `SelectiveBroadcastSubscriptionEvent`: `SUBSCRIBED`, `UNSUBSCRIBED`.
- `commonapi.mainloop`
  - `MainLoopContext(name="COMMONAPI_DEFAULT_MAINLOOP_CONTEXT")`: main loop
    implementations subscribe with `subscribe_for_dispatch_sources`,
    `subscribe_for_watches`, `subscribe_for_timeouts` and
    `subscribe_for_wakeup_events`, which return handles for the matching
    `unsubscribe_for_*` methods (an unknown handle raises `ValueError`).
    `register_*`/`deregister_*` and `wakeup()` call the listeners, those
    subscribed last first. `is_initialized()` tells whether anyone listens
    for dispatch sources or watches.
  - Abstract interfaces `DispatchSource`, `Watch` and `Timeout`,
    the `DispatchPriority` enum, the constants `TIMEOUT_INFINITE` and
    `TIMEOUT_NONE`, and `current_time_ms()`, a monotonic clock in ms.
- `commonapi.inifile` – `IniFileReader` with `load(path)` and
  `get_section(name)` (or `None`), and `Section` with `mappings` and
  `get_value(key)` (empty string when absent). Lines starting with `;` are
  comments; duplicate sections and keys are logged and ignored, the first
  wins. `load` raises `OSError` when the file cannot be opened.
- `commonapi.logger` – the `Level` enum (`NONE` … `VERBOSE`),
  `level_from_string()`, `init(use_console, file_name, use_dlt, level)`,
  `is_logged()`, `log(level, *args)` and `fatal`, `error`, `warning`,
  `info`, `debug`, `verbose`. Lines look like `[CAPI][INFO] message` and go
  to standard error and, if a file name was given, appended to that file.
  The default level is `INFO`.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from commonapi.address import Address
from commonapi.event import Event

addr = Address("local:my.Interface:v1_2:instance0")
print(addr)            # local:my.Interface:v1_2:instance0

event = Event()
sub = event.subscribe(lambda value: print("got", value))
event.notify_listeners(42)   # got 42
event.unsubscribe(sub)
```

Reading a configuration file:

```python
from commonapi.inifile import IniFileReader

reader = IniFileReader()
reader.load("commonapi.ini")
section = reader.get_section("default")
if section is not None:
    print(section.get_value("binding"))
```

Logging:

```python
from commonapi import logger

logger.init(True, "", False, "debug")
logger.info("service ", "started")
```

## What this package does not do

- There is no runtime that builds proxies or registers services, and no
  transport binding: `Proxy`, `Stub` and `StubAdapter` are base classes to
  be implemented by such a layer.
- There is no main loop: `MainLoopContext` only passes sources, watches,
  timeouts and wakeups to a loop that you supply.
- The `use_dlt` flag of `logger.init` is recorded, but no trace backend
  exists; output goes to the console and a file only.
- The package provides no command-line tool.