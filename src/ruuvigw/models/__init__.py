"""Data models: decoded readings and the gateway ingestion envelope."""

from ruuvigw.models._base import UNIX_EPOCH, RuuviBaseModel, UnixTimestamp, epoch_seconds, parse_unix_timestamp
from ruuvigw.models.envelope import GatewayEnvelope, GatewayMessage, TagMessage
from ruuvigw.models.readings import Reading, ReadingE1, ReadingV5, ReadingV6

__all__ = [
    "UNIX_EPOCH",
    "GatewayEnvelope",
    "GatewayMessage",
    "Reading",
    "ReadingE1",
    "ReadingV5",
    "ReadingV6",
    "RuuviBaseModel",
    "TagMessage",
    "UnixTimestamp",
    "epoch_seconds",
    "parse_unix_timestamp",
]
