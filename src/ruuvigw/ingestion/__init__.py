"""Ingestion layer.

Adapters that take a gateway's POST body, validate it and apply the
decoded tag readings to the measurement store.
"""

from ruuvigw.ingestion.apply import IngestionReport, apply_gateway_message, decode_tags
from ruuvigw.ingestion.parse import parse_gateway_payload, parse_gateway_request

__all__ = [
    "IngestionReport",
    "apply_gateway_message",
    "decode_tags",
    "parse_gateway_payload",
    "parse_gateway_request",
]
