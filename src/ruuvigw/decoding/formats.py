"""Ruuvi manufacturer payload layouts.

Every layout is a fixed-size big-endian record whose first byte is the
format tag.  Decoding is two-step: the record is unpacked into raw
integers, then each raw value is run through a :class:`FieldSpec` that
maps its "not available" bit pattern to ``None`` and scales everything
else.  Scaled decimals are rounded to the resolution of the encoding so
``4064 * 0.005`` yields ``20.32`` and not a binary approximation of it.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ruuvigw._constants import FORMAT_E1, FORMAT_V5, FORMAT_V6
from ruuvigw.exceptions import PayloadDecodeError
from ruuvigw.models.readings import Reading, ReadingE1, ReadingV5, ReadingV6


def _identity(raw: Any) -> Any:
    return raw


def _scaled(factor: float, digits: int) -> Callable[[int], float]:
    def convert(raw: int) -> float:
        return round(raw * factor, digits)

    return convert


def _offset(base: int) -> Callable[[int], int]:
    def convert(raw: int) -> int:
        return raw + base

    return convert


def _mac(raw: bytes) -> str:
    return ":".join(f"{b:02X}" for b in raw)


# Luminosity in format 6 is a single logarithmic byte covering 0..65535 lux.
_LOG_LUX_DELTA = math.log(65535 + 1) / 254


def _log_luminosity(raw: int) -> float:
    return round(math.exp(raw * _LOG_LUX_DELTA) - 1, 2)


@dataclass(frozen=True)
class FieldSpec:
    """Sentinel and conversion for one raw field."""

    sentinel: int | bytes | None = None
    convert: Callable[[Any], Any] = _identity

    def decode(self, raw: Any) -> Any:
        if self.sentinel is not None and raw == self.sentinel:
            return None
        return self.convert(raw)


TEMPERATURE = FieldSpec(-0x8000, _scaled(0.005, 3))
HUMIDITY = FieldSpec(0xFFFF, _scaled(0.0025, 4))
PRESSURE = FieldSpec(0xFFFF, _offset(50_000))
ACCELERATION = FieldSpec(-0x8000)
BATTERY = FieldSpec(0x7FF, _offset(1_600))
TX_POWER = FieldSpec(0x1F, lambda raw: raw * 2 - 40)
COUNTER = FieldSpec()
PARTICULATE = FieldSpec(0xFFFF, _scaled(0.1, 1))
CO2 = FieldSpec(0xFFFF)
AIR_INDEX = FieldSpec(0x1FF)
LUMINOSITY_LOG = FieldSpec(0xFF, _log_luminosity)
LUMINOSITY_E1 = FieldSpec(0xFF_FFFF, _scaled(0.01, 2))


def _mac_field(size: int) -> FieldSpec:
    return FieldSpec(b"\xff" * size, _mac)


_V5_FIELDS: dict[str, FieldSpec] = {
    "temperature": TEMPERATURE,
    "humidity": HUMIDITY,
    "pressure": PRESSURE,
    "acceleration_x": ACCELERATION,
    "acceleration_y": ACCELERATION,
    "acceleration_z": ACCELERATION,
    "battery_voltage": BATTERY,
    "tx_power": TX_POWER,
    "movement_counter": COUNTER,
    "measurement_sequence": COUNTER,
    "mac": _mac_field(6),
}

_AIR_FIELDS: dict[str, FieldSpec] = {
    "temperature": TEMPERATURE,
    "humidity": HUMIDITY,
    "pressure": PRESSURE,
    "pm2_5": PARTICULATE,
    "co2": CO2,
    "voc_index": AIR_INDEX,
    "nox_index": AIR_INDEX,
    "measurement_sequence": COUNTER,
}

_V6_FIELDS: dict[str, FieldSpec] = {
    **_AIR_FIELDS,
    "luminosity": LUMINOSITY_LOG,
    "mac": _mac_field(3),
}

_E1_FIELDS: dict[str, FieldSpec] = {
    **_AIR_FIELDS,
    "pm1_0": PARTICULATE,
    "pm4_0": PARTICULATE,
    "pm10_0": PARTICULATE,
    "luminosity": LUMINOSITY_E1,
    "mac": _mac_field(6),
}

_V5_STRUCT = struct.Struct(">BhHHhhhHBH6s")
_V6_STRUCT = struct.Struct(">BhHHHHBBBBBB3s")
_E1_STRUCT = struct.Struct(">BhHHHHHHHBB3s3s3sB5s6s")

# Flag bits carrying the least significant bit of the 9-bit air quality indices.
_VOC_LSB_FLAG = 6
_NOX_LSB_FLAG = 7


def _apply_fields(raw: dict[str, Any], fields: dict[str, FieldSpec]) -> dict[str, Any]:
    return {name: fields[name].decode(value) for name, value in raw.items()}


def _air_index(high_bits: int, flags: int, flag_bit: int) -> int:
    return (high_bits << 1) | ((flags >> flag_bit) & 1)


def decode_v5(payload: bytes) -> ReadingV5:
    """Decode a 24-byte RAWv2 record."""
    (
        _tag,
        temperature,
        humidity,
        pressure,
        acc_x,
        acc_y,
        acc_z,
        power_info,
        movement,
        sequence,
        mac,
    ) = _V5_STRUCT.unpack(payload)
    raw = {
        "temperature": temperature,
        "humidity": humidity,
        "pressure": pressure,
        "acceleration_x": acc_x,
        "acceleration_y": acc_y,
        "acceleration_z": acc_z,
        "battery_voltage": power_info >> 5,
        "tx_power": power_info & 0x1F,
        "movement_counter": movement,
        "measurement_sequence": sequence,
        "mac": mac,
    }
    return ReadingV5(**_apply_fields(raw, _V5_FIELDS))


def decode_v6(payload: bytes) -> ReadingV6:
    """Decode a 20-byte format 6 record."""
    (
        _tag,
        temperature,
        humidity,
        pressure,
        pm2_5,
        co2,
        voc_high,
        nox_high,
        luminosity,
        _reserved,
        sequence,
        flags,
        mac,
    ) = _V6_STRUCT.unpack(payload)
    raw = {
        "temperature": temperature,
        "humidity": humidity,
        "pressure": pressure,
        "pm2_5": pm2_5,
        "co2": co2,
        "voc_index": _air_index(voc_high, flags, _VOC_LSB_FLAG),
        "nox_index": _air_index(nox_high, flags, _NOX_LSB_FLAG),
        "luminosity": luminosity,
        "measurement_sequence": sequence,
        "mac": mac,
    }
    return ReadingV6(**_apply_fields(raw, _V6_FIELDS))


def decode_e1(payload: bytes) -> ReadingE1:
    """Decode a 40-byte extended format E1 record."""
    (
        _tag,
        temperature,
        humidity,
        pressure,
        pm1_0,
        pm2_5,
        pm4_0,
        pm10_0,
        co2,
        voc_high,
        nox_high,
        luminosity,
        _reserved,
        sequence,
        flags,
        _reserved_tail,
        mac,
    ) = _E1_STRUCT.unpack(payload)
    raw = {
        "temperature": temperature,
        "humidity": humidity,
        "pressure": pressure,
        "pm1_0": pm1_0,
        "pm2_5": pm2_5,
        "pm4_0": pm4_0,
        "pm10_0": pm10_0,
        "co2": co2,
        "voc_index": _air_index(voc_high, flags, _VOC_LSB_FLAG),
        "nox_index": _air_index(nox_high, flags, _NOX_LSB_FLAG),
        "luminosity": int.from_bytes(luminosity, "big"),
        "measurement_sequence": int.from_bytes(sequence, "big"),
        "mac": mac,
    }
    return ReadingE1(**_apply_fields(raw, _E1_FIELDS))


@dataclass(frozen=True)
class PayloadLayout:
    """A registered payload format."""

    name: str
    size: int
    decode: Callable[[bytes], Reading]


LAYOUTS: dict[int, PayloadLayout] = {
    FORMAT_V5: PayloadLayout("V5", _V5_STRUCT.size, decode_v5),
    FORMAT_V6: PayloadLayout("V6", _V6_STRUCT.size, decode_v6),
    FORMAT_E1: PayloadLayout("E1", _E1_STRUCT.size, decode_e1),
}


def decode_payload(payload: bytes) -> Reading:
    """Decode a Ruuvi payload (company identifier already stripped).

    Raises
    ------
    PayloadDecodeError
        Empty payload, unknown format tag, or a record whose length does
        not match its layout.
    """
    if not payload:
        raise PayloadDecodeError("Empty manufacturer payload", payload=payload)
    layout = LAYOUTS.get(payload[0])
    if layout is None:
        raise PayloadDecodeError(f"Unsupported data format 0x{payload[0]:02X}", payload=payload)
    if len(payload) != layout.size:
        raise PayloadDecodeError(
            f"Data format {layout.name} expects {layout.size} bytes, got {len(payload)}",
            payload=payload,
        )
    return layout.decode(payload)
