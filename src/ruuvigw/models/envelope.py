"""Ingestion request models.

The gateway posts one JSON document per batch::

    {"data": {"coordinates": "", "gw_mac": "FF:81:4E:A5:22:E7",
              "nonce": 3267643756, "timestamp": 1736885086,
              "tags": {"DD:19:92:CB:60:21": {"data": "0201061BFF99...",
                                              "rssi": -50,
                                              "timestamp": 1736885086}}}}

Hex decoding and schema checks happen here, at the boundary, so the
decoding and state layers only ever see well-formed messages.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, ConfigDict, Field

from ruuvigw.models._base import RuuviBaseModel, UnixTimestamp


def parse_hex_bytes(value: Any) -> bytes:
    """Decode a hex string (either case, no separators) into bytes."""
    if isinstance(value, bytes | bytearray):
        return bytes(value)
    if not isinstance(value, str):
        raise ValueError("advertisement data must be a hex string")
    if any(char.isspace() for char in value):
        raise ValueError("advertisement data must not contain whitespace")
    try:
        return bytes.fromhex(value)
    except ValueError as exc:
        raise ValueError(f"advertisement data is not valid hex: {exc}") from exc


HexBytes = Annotated[bytes, BeforeValidator(parse_hex_bytes)]


class TagMessage(RuuviBaseModel):
    """One tag's most recent advertisement as relayed by the gateway."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    data: HexBytes
    timestamp: UnixTimestamp
    rssi: int


class GatewayMessage(RuuviBaseModel):
    """A gateway's batch of tag advertisements."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    coordinates: str = ""
    timestamp: UnixTimestamp
    nonce: int = Field(..., ge=0)
    gw_mac: str
    tags: dict[str, TagMessage] = Field(default_factory=dict)


class GatewayEnvelope(RuuviBaseModel):
    """Top-level wrapper of the gateway's POST body."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    data: GatewayMessage
