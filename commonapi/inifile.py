"""Reader for the simple INI files used for CommonAPI configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from commonapi import logger


@dataclass
class Section:
    """The key/value mappings of one ``[section]``."""

    mappings: dict[str, str] = field(default_factory=dict)

    def get_value(self, key: str) -> str:
        """Return the value for ``key``, or an empty string when absent."""
        return self.mappings.get(key, "")


@dataclass
class IniFileReader:
    """Collects sections from INI files.

    Lines starting with ``;`` are comments. Duplicate sections and duplicate
    keys are reported and ignored; the first definition wins. Key/value lines
    before the first section are ignored.
    """

    sections: dict[str, Section] = field(default_factory=dict)

    def load(self, path: Union[str, Path]) -> None:
        """Read ``path`` and add its sections; raise OSError if it cannot be opened."""
        try:
            stream = open(path, encoding="utf-8")
        except OSError:
            logger.error("Failed to load ini file: ", path)
            raise

        with stream:
            current_name = ""
            current: Optional[Section] = None
            for line_number, raw in enumerate(stream, start=1):
                line = raw.strip()
                if line.startswith(";"):
                    continue
                if line.startswith("["):
                    end = line.find("]")
                    if end == -1:
                        logger.error(
                            "Missing ']' in section definition (line ", line_number, ")"
                        )
                        continue
                    current_name = line[1:end]
                    if current_name in self.sections:
                        logger.error(
                            "Double definition of section '", current_name,
                            "' ignoring definition (line ", line_number, ")",
                        )
                        current = None
                    else:
                        current = Section()
                        self.sections[current_name] = current
                elif current is not None:
                    key, sep, value = line.partition("=")
                    if sep:
                        key = key.strip()
                        if key in current.mappings:
                            logger.error(
                                "Double definition for key '", key,
                                "' in section '", current_name,
                                "' (line ", line_number, ")",
                            )
                        else:
                            current.mappings[key] = value.strip()
                    elif line:
                        logger.error(
                            "Missing '=' in key=value definition (line ", line_number, ")"
                        )

    def get_section(self, name: str) -> Optional[Section]:
        """Return the named section, or None when it was not defined."""
        return self.sections.get(name)