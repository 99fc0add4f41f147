"""Exporter configuration for ruuvigw."""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path
from typing import Any

from ruuvigw._constants import DEFAULT_INTERFACE, DEFAULT_LOG_LEVEL, DEFAULT_PORT, MAX_BODY_SIZE
from ruuvigw.exceptions import RuuviConfigError


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise RuuviConfigError(f"{name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ExporterConfig:
    """Exporter configuration.

    Parameters
    ----------
    port : int
        TCP port to listen on.
    interface : str
        Address to bind to.
    mac_mapping : Path or None
        YAML file mapping MAC addresses to display names.
    log_level : str
        Root logging level name.
    max_body_size : int
        Largest accepted ingestion request body in bytes.
    """

    port: int = DEFAULT_PORT
    interface: str = DEFAULT_INTERFACE
    mac_mapping: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    max_body_size: int = MAX_BODY_SIZE

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise RuuviConfigError(f"port must be between 0 and 65535, got {self.port}")
        if self.max_body_size <= 0:
            raise RuuviConfigError("max_body_size must be positive")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise RuuviConfigError(f"unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ExporterConfig:
        """Create configuration from environment variables.

        Reads ``RUUVIGW_PORT``, ``RUUVIGW_INTERFACE``,
        ``RUUVIGW_MAC_MAPPING`` and ``RUUVIGW_LOG_LEVEL``.  Explicit
        keyword arguments whose value is not ``None`` override the
        environment.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        port_env = env.get("RUUVIGW_PORT")
        if port_env is not None:
            config_kwargs["port"] = _env_int("RUUVIGW_PORT", port_env)

        interface_env = env.get("RUUVIGW_INTERFACE")
        if interface_env:
            config_kwargs["interface"] = interface_env

        mapping_env = env.get("RUUVIGW_MAC_MAPPING")
        if mapping_env:
            config_kwargs["mac_mapping"] = Path(mapping_env)

        level_env = env.get("RUUVIGW_LOG_LEVEL")
        if level_env:
            config_kwargs["log_level"] = level_env.upper()

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})
        if isinstance(config_kwargs.get("mac_mapping"), str):
            config_kwargs["mac_mapping"] = Path(config_kwargs["mac_mapping"])

        return cls(**config_kwargs)
