"""CommonAPI service addresses of the form ``domain:interface:version:instance``."""

from __future__ import annotations

from functools import total_ordering
from typing import Optional

from commonapi import logger

_DEFAULT_VERSION = "v1_0"


class InvalidAddressError(ValueError):
    """Raised when a string is not a valid CommonAPI address."""


def _is_valid_version(version: str) -> bool:
    if "_" not in version or not version.startswith("v"):
        return False
    return all(ch.isdigit() or ch == "_" for ch in version[1:])


@total_ordering
class Address:
    """A domain, a versioned interface name and an instance name.

    The interface always carries its version (``name:vMAJOR_MINOR``); when an
    address string gives none, ``v1_0`` is used.
    """

    def __init__(self, address: Optional[str] = None) -> None:
        self.domain = ""
        self.interface = ""
        self.instance = ""
        if address is not None:
            self.set_address(address)

    @classmethod
    def from_parts(cls, domain: str, interface: str, instance: str) -> "Address":
        """Build an address by parsing ``domain:interface:instance``."""
        return cls(f"{domain}:{interface}:{instance}")

    def set_address(self, address: str) -> None:
        """Parse ``address`` and replace all parts; raise InvalidAddressError if malformed."""
        domain, sep, rest = address.partition(":")
        valid = bool(sep)
        interface = version = instance = ""
        if valid:
            interface, sep, rest = rest.partition(":")
            valid = bool(sep)
        if valid:
            version, sep, tail = rest.partition(":")
            if not sep:
                version, instance = "", rest
            else:
                if version and not _is_valid_version(version):
                    valid = False
                elif ":" in tail:
                    valid = False
                else:
                    instance = tail
        if not valid:
            logger.error("Attempted to set invalid CommonAPI address: ", address)
            raise InvalidAddressError(f"invalid CommonAPI address: {address!r}")

        self.domain = domain
        self.interface = f"{interface}:{version or _DEFAULT_VERSION}"
        self.instance = instance

    @property
    def address(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"{self.domain}:{self.interface}:{self.instance}"

    def __repr__(self) -> str:
        return f"Address({str(self)!r})"

    def _key(self) -> tuple[str, str, str]:
        return (self.domain, self.interface, self.instance)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())