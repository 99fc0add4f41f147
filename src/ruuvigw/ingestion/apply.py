"""Ingestion application helpers.

Turns one validated :class:`~ruuvigw.models.envelope.GatewayMessage` into
store updates:

- decode every tag's advertisement (outside the store lock)
- log tags without Ruuvi data, undecodable payloads and framing errors
- apply the gateway record and all decoded tags in one batch

A tag that yields no reading leaves its previous record untouched; the
last known good reading keeps being exported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ruuvigw.decoding import DecodeOutcome, decode_advertisement
from ruuvigw.models.envelope import GatewayMessage, TagMessage
from ruuvigw.state.store import GatewayState, MeasurementStore, SensorRecord

_logger = logging.getLogger(__name__)


@dataclass
class IngestionReport:
    """Per-request tally of what happened to each tag."""

    accepted: list[str] = field(default_factory=list)
    no_vendor_data: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.accepted) + len(self.no_vendor_data) + len(self.failed)


def _report_outcome(tag_id: str, tag: TagMessage, outcome: DecodeOutcome) -> None:
    if outcome.framing_error is not None:
        _logger.warning(
            "Malformed advertisement from tag %s: %s (data=%s)",
            tag_id,
            outcome.framing_error,
            tag.data.hex().upper(),
        )
    for failure in outcome.failures:
        _logger.warning(
            "Could not parse Ruuvi data from tag %s: %s (payload=%s)",
            tag_id,
            failure.reason,
            failure.payload.hex().upper(),
        )
    if not outcome.vendor_found:
        _logger.warning("No Ruuvi manufacturer data found in advertisement from tag %s", tag_id)
    elif outcome.reading is not None:
        _logger.debug("Tag %s decoded as %s", tag_id, outcome.reading.data_format)


def decode_tags(message: GatewayMessage, report: IngestionReport) -> list[tuple[str, SensorRecord]]:
    """Decode every tag of *message*, returning records for those that succeeded."""
    records: list[tuple[str, SensorRecord]] = []
    for tag_id, tag in message.tags.items():
        outcome = decode_advertisement(tag.data)
        _report_outcome(tag_id, tag, outcome)
        if outcome.reading is not None:
            records.append((tag_id, SensorRecord(last_seen=tag.timestamp, rssi=tag.rssi, reading=outcome.reading)))
            report.accepted.append(tag_id)
        elif outcome.vendor_found:
            report.failed.append(tag_id)
        else:
            report.no_vendor_data.append(tag_id)
    return records


def apply_gateway_message(store: MeasurementStore, message: GatewayMessage) -> IngestionReport:
    """Decode *message* and apply it to *store*."""
    report = IngestionReport()
    records = decode_tags(message, report)
    gateway = GatewayState(last_update=message.timestamp, last_nonce=message.nonce, mac=message.gw_mac)
    store.upsert_batch(gateway, records)
    _logger.debug(
        "Applied gateway %s batch: %d accepted, %d without Ruuvi data, %d failed",
        message.gw_mac,
        len(report.accepted),
        len(report.no_vendor_data),
        len(report.failed),
    )
    return report
