"""Human-readable names for gateway and tag MAC addresses.

The mapping is a flat YAML document loaded once at startup::

    "AA:BB:CC:DD:EE:FF": "Living Room"
    "11:22:33:44:55:66": "Kitchen"

Quote the keys: PyYAML reads unquoted all-digit addresses such as
``11:22:33:44:55:66`` as base-60 integers, which is rejected here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Protocol

import yaml

from ruuvigw.exceptions import RuuviConfigError

_logger = logging.getLogger(__name__)


class LabelLookup(Protocol):
    """Anything that can resolve an identifier to an optional display name."""

    def lookup(self, identifier: str) -> str | None: ...


class LabelMapping:
    """Read-only identifier → name mapping."""

    def __init__(self, names: Mapping[str, str] | None = None) -> None:
        self._names: Mapping[str, str] = MappingProxyType(dict(names or {}))

    def lookup(self, identifier: str) -> str | None:
        return self._names.get(identifier)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._names

    @classmethod
    def from_document(cls, document: Any) -> LabelMapping:
        """Build a mapping from a parsed YAML document."""
        if document is None:
            return cls()
        if not isinstance(document, Mapping):
            raise RuuviConfigError(f"MAC mapping must be a mapping, got {type(document).__name__}")
        names: dict[str, str] = {}
        for key, value in document.items():
            if not isinstance(key, str):
                raise RuuviConfigError(f"MAC mapping key {key!r} is not a string; quote MAC addresses")
            if isinstance(value, bool) or not isinstance(value, str | int | float):
                raise RuuviConfigError(f"MAC mapping value for {key!r} must be a scalar name")
            names[key] = str(value)
        return cls(names)

    @classmethod
    def load(cls, path: str | Path) -> LabelMapping:
        """Load a mapping from a YAML file.

        Raises
        ------
        RuuviConfigError
            The file cannot be read, is not valid YAML, or is not a flat
            string mapping.
        """
        try:
            with open(path, encoding="utf-8") as handle:
                document = yaml.safe_load(handle)
        except OSError as exc:
            raise RuuviConfigError(f"Cannot read MAC mapping {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise RuuviConfigError(f"Invalid YAML in MAC mapping {path}: {exc}") from exc
        mapping = cls.from_document(document)
        _logger.info("Loaded %d names from %s", len(mapping), path)
        return mapping
