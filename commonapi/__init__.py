"""Middleware building blocks: addresses, versions, events, proxy and stub bases, main-loop hooks, logging and INI reading."""

__version__ = "0.1.0"
__all__ = ["address", "event", "inifile", "logger", "mainloop", "proxy", "version"]