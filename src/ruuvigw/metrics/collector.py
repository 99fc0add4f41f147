"""Metrics document for a store snapshot.

Output order is fixed: gateway samples first, then every tag in
ascending id order.  Within a tag the order is last-seen time, sequence
number, the environmental trio, the format specific fields and RSSI
last.  Fields a reading does not carry are skipped, never written as
zero.
"""

from __future__ import annotations

from typing import assert_never

from ruuvigw.labels import LabelLookup
from ruuvigw.metrics.exposition import LabelSet, labelset, sample_line
from ruuvigw.models._base import epoch_seconds
from ruuvigw.models.readings import Reading, ReadingE1, ReadingV5, ReadingV6
from ruuvigw.state.store import SensorRecord, StoreSnapshot


class _Lines:
    """Accumulates sample lines for one label set."""

    def __init__(self, out: list[str], labels: LabelSet) -> None:
        self._out = out
        self._labels = labels

    def add(self, name: str, value: int | float) -> None:
        self._out.append(sample_line(name, self._labels, value))

    def add_optional(self, name: str, value: int | float | None) -> None:
        if value is not None:
            self.add(name, value)


def _ratio(percent: float | None) -> float | None:
    # Six decimals hold the 0.0025 % resolution exactly.
    return None if percent is None else round(percent / 100, 6)


def _thousandths(value: int | None) -> float | None:
    return None if value is None else value / 1000


def _add_environmental(lines: _Lines, reading: Reading) -> None:
    lines.add_optional("ruuvi_tag_sequence_number", reading.measurement_sequence)
    lines.add_optional("ruuvi_tag_temperature_celsius", reading.temperature)
    lines.add_optional("ruuvi_tag_humidity_ratio", _ratio(reading.humidity))
    lines.add_optional("ruuvi_tag_pressure_pascals", reading.pressure)


def _add_motion_and_power(lines: _Lines, reading: ReadingV5) -> None:
    lines.add_optional("ruuvi_tag_movement_counter", reading.movement_counter)
    axes = (reading.acceleration_x, reading.acceleration_y, reading.acceleration_z)
    # Acceleration is one vector: all three axes or none.
    if None not in axes:
        for axis, value in zip("xyz", axes, strict=True):
            lines.add(f"ruuvi_tag_acceleration_{axis}_g", value / 1000)
    lines.add_optional("ruuvi_tag_battery_volts", _thousandths(reading.battery_voltage))
    lines.add_optional("ruuvi_tag_tx_power_dBm", reading.tx_power)


def _add_air_quality(lines: _Lines, reading: ReadingV6 | ReadingE1) -> None:
    lines.add_optional("ruuvi_tag_pm2_5_ugm3", reading.pm2_5)
    lines.add_optional("ruuvi_tag_co2_ppm", reading.co2)
    lines.add_optional("ruuvi_tag_voc_index", reading.voc_index)
    lines.add_optional("ruuvi_tag_nox_index", reading.nox_index)
    lines.add_optional("ruuvi_tag_luminosity_lux", reading.luminosity)


def _add_reading(lines: _Lines, reading: Reading) -> None:
    _add_environmental(lines, reading)
    match reading:
        case ReadingV5():
            _add_motion_and_power(lines, reading)
        case ReadingV6():
            _add_air_quality(lines, reading)
        case ReadingE1():
            lines.add_optional("ruuvi_tag_pm1_0_ugm3", reading.pm1_0)
            lines.add_optional("ruuvi_tag_pm4_0_ugm3", reading.pm4_0)
            lines.add_optional("ruuvi_tag_pm10_0_ugm3", reading.pm10_0)
            _add_air_quality(lines, reading)
        case _:
            assert_never(reading)


def _with_name(labels: LabelSet, names: LabelLookup, identifier: str) -> LabelSet:
    name = names.lookup(identifier)
    return labels if name is None else labels.label("name", name)


def _add_tag(out: list[str], tag_id: str, record: SensorRecord, gw_mac: str, names: LabelLookup) -> None:
    labels = _with_name(labelset().label("mac", tag_id).label("gw_mac", gw_mac), names, tag_id)
    lines = _Lines(out, labels)
    lines.add("ruuvi_tag_last_seen_timestamp_seconds", epoch_seconds(record.last_seen))
    _add_reading(lines, record.reading)
    lines.add("ruuvi_tag_rssi_dBm", record.rssi)


def collect_metrics(snapshot: StoreSnapshot, names: LabelLookup) -> str:
    """Render *snapshot* as a newline-terminated plaintext document."""
    out: list[str] = []
    gateway = snapshot.gateway

    gw_lines = _Lines(out, _with_name(labelset().label("gw_mac", gateway.mac), names, gateway.mac))
    gw_lines.add("ruuvi_gateway_update_timestamp_seconds", epoch_seconds(gateway.last_update))
    gw_lines.add_optional("ruuvi_gateway_nonce", gateway.last_nonce)

    for tag_id, record in snapshot.sorted_sensors():
        _add_tag(out, tag_id, record, gateway.mac, names)

    return "\n".join(out) + "\n"
