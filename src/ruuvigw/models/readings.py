"""Decoded sensor readings.

A :data:`Reading` is a closed union over the supported payload formats.
Each variant only carries the fields its format transmits; every field is
optional and ``None`` means the sensor reported "not available".

Units follow the wire encoding rather than the exported metrics:
humidity is in percent, acceleration in milli-g and battery potential in
millivolts.  The metrics layer converts to ratios, g and volts.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from ruuvigw.models._base import RuuviBaseModel


class ReadingV5(RuuviBaseModel):
    """Data format 5 (RAWv2), sent by RuuviTag."""

    data_format: Literal["V5"] = "V5"
    temperature: float | None = None
    humidity: float | None = None
    pressure: int | None = None
    acceleration_x: int | None = None
    acceleration_y: int | None = None
    acceleration_z: int | None = None
    battery_voltage: int | None = None
    tx_power: int | None = None
    movement_counter: int | None = None
    measurement_sequence: int | None = None
    mac: str | None = None


class _AirQualityReading(RuuviBaseModel):
    temperature: float | None = None
    humidity: float | None = None
    pressure: int | None = None
    pm2_5: float | None = None
    co2: int | None = None
    voc_index: int | None = None
    nox_index: int | None = None
    luminosity: float | None = None
    measurement_sequence: int | None = None
    mac: str | None = None


class ReadingV6(_AirQualityReading):
    """Data format 6, the compact Ruuvi Air broadcast.

    ``mac`` only holds the three least significant bytes of the address.
    """

    data_format: Literal["V6"] = "V6"


class ReadingE1(_AirQualityReading):
    """Extended data format E1, the full Ruuvi Air broadcast."""

    data_format: Literal["E1"] = "E1"
    pm1_0: float | None = None
    pm4_0: float | None = None
    pm10_0: float | None = None


Reading = Annotated[ReadingV5 | ReadingV6 | ReadingE1, Field(discriminator="data_format")]
"""Any decoded reading, discriminated by ``data_format``."""
