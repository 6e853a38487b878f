"""Interface version numbers."""

from __future__ import annotations

from dataclasses import dataclass

_UINT32_MAX = 2**32 - 1


@dataclass(order=True)
class Version:
    """A major/minor interface version, each an unsigned 32-bit number."""

    major: int = 0
    minor: int = 0

    def __post_init__(self) -> None:
        for name, value in (("major", self.major), ("minor", self.minor)):
            if not 0 <= value <= _UINT32_MAX:
                raise ValueError(f"{name} version {value} outside 0..{_UINT32_MAX}")

    def __str__(self) -> str:
        return f"v{self.major}_{self.minor}"