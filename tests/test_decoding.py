"""Tests for Ruuvi manufacturer payload decoding."""

from __future__ import annotations

import pytest

from ruuvigw.decoding import LAYOUTS, decode_advertisement, decode_payload, split_manufacturer_data
from ruuvigw.exceptions import PayloadDecodeError
from ruuvigw.models.readings import ReadingE1, ReadingV5, ReadingV6

V5_ADVERTISEMENT = bytes.fromhex("0201061BFF9904050FE0337CC4ABFC1400340024A5B6EBA544DD1992CB6021")
V5_SECOND_STRUCTURE = "1BFF9904050FF33391C47D0008FFF403F8837637EE6EDE4FBC29ECB5"
E1_ADVERTISEMENT = bytes.fromhex(
    "2BFF9904E1170C5668C79E0065007004BD11CA00C90A0213E0ACFFFFFFDECDEE10FFFFFFFFFFCBB8334C884F"
)
V6_RECORD = bytes.fromhex("06170C5668C79E007000C90A0200FF2AC04C884F")
V5_ALL_UNAVAILABLE = bytes.fromhex("05" "8000" "FFFF" "FFFF" "8000" "8000" "8000" "FFFF" "00" "0000" "FFFFFFFFFFFF")


def _manufacturer_structure(record: bytes, company_id: int = 0x0499) -> bytes:
    body = bytes([0xFF]) + company_id.to_bytes(2, "little") + record
    return bytes([len(body)]) + body


# ------------------------------------------------------------------
# Format dispatch
# ------------------------------------------------------------------


class TestDecodePayload:
    def test_layout_sizes(self) -> None:
        assert {layout.name: layout.size for layout in LAYOUTS.values()} == {"V5": 24, "V6": 20, "E1": 40}

    def test_v5_literal_values(self) -> None:
        reading = decode_payload(bytes.fromhex("050FE0337CC4ABFC1400340024A5B6EBA544DD1992CB6021"))

        assert isinstance(reading, ReadingV5)
        assert reading.temperature == 20.32
        assert reading.humidity == 32.95
        assert reading.pressure == 100347
        assert (reading.acceleration_x, reading.acceleration_y, reading.acceleration_z) == (-1004, 52, 36)
        assert reading.battery_voltage == 2925
        assert reading.tx_power == 4
        assert reading.movement_counter == 235
        assert reading.measurement_sequence == 42308
        assert reading.mac == "DD:19:92:CB:60:21"

    def test_v5_sentinels_decode_to_none(self) -> None:
        reading = decode_payload(V5_ALL_UNAVAILABLE)

        assert isinstance(reading, ReadingV5)
        assert reading.temperature is None
        assert reading.humidity is None
        assert reading.pressure is None
        assert reading.acceleration_x is None
        assert reading.acceleration_y is None
        assert reading.acceleration_z is None
        assert reading.battery_voltage is None
        assert reading.tx_power is None
        assert reading.mac is None
        # Counters have no "not available" encoding.
        assert reading.movement_counter == 0
        assert reading.measurement_sequence == 0

    def test_v5_battery_and_tx_power_are_independent(self) -> None:
        # Battery bits all set, tx power bits = 0 -> -40 dBm.
        record = bytearray(V5_ALL_UNAVAILABLE)
        record[13:15] = (0x7FF << 5).to_bytes(2, "big")
        reading = decode_payload(bytes(record))

        assert reading.battery_voltage is None
        assert reading.tx_power == -40

    def test_v5_minimum_values(self) -> None:
        record = bytearray(V5_ALL_UNAVAILABLE)
        record[1:3] = (-32767).to_bytes(2, "big", signed=True)
        record[3:5] = (0).to_bytes(2, "big")
        record[5:7] = (0).to_bytes(2, "big")
        reading = decode_payload(bytes(record))

        assert reading.temperature == -163.835
        assert reading.humidity == 0.0
        assert reading.pressure == 50000

    def test_v6_literal_values(self) -> None:
        reading = decode_payload(V6_RECORD)

        assert isinstance(reading, ReadingV6)
        assert reading.temperature == 29.5
        assert reading.humidity == 55.3
        assert reading.pressure == 101102
        assert reading.pm2_5 == 11.2
        assert reading.co2 == 201
        # Flags 0xC0 carry the least significant bits of both indices.
        assert reading.voc_index == 21
        assert reading.nox_index == 5
        assert reading.luminosity == 0.0
        assert reading.measurement_sequence == 42
        assert reading.mac == "4C:88:4F"

    def test_v6_logarithmic_luminosity_upper_bound(self) -> None:
        record = bytearray(V6_RECORD)
        record[13] = 254
        reading = decode_payload(bytes(record))

        assert reading.luminosity == pytest.approx(65535, abs=0.01)

    def test_v6_unavailable_fields(self) -> None:
        record = bytearray(V6_RECORD)
        record[7:9] = b"\xff\xff"  # PM2.5
        record[11] = 0xFF  # VOC high bits; flag bit 6 already set
        record[13] = 0xFF  # luminosity
        reading = decode_payload(bytes(record))

        assert reading.pm2_5 is None
        assert reading.voc_index is None
        assert reading.luminosity is None
        assert reading.nox_index == 5

    def test_e1_literal_values(self) -> None:
        reading = decode_payload(E1_ADVERTISEMENT[4:])

        assert isinstance(reading, ReadingE1)
        assert reading.temperature == 29.5
        assert reading.humidity == 55.3
        assert reading.pressure == 101102
        assert reading.pm1_0 == 10.1
        assert reading.pm2_5 == 11.2
        assert reading.pm4_0 == 121.3
        assert reading.pm10_0 == 455.4
        assert reading.co2 == 201
        assert reading.voc_index == 20
        assert reading.nox_index == 4
        assert reading.luminosity == 13027
        assert reading.measurement_sequence == 14601710
        assert reading.mac == "CB:B8:33:4C:88:4F"

    def test_e1_has_no_motion_or_power_fields(self) -> None:
        reading = decode_payload(E1_ADVERTISEMENT[4:])

        dumped = reading.model_dump()
        for name in ("acceleration_x", "battery_voltage", "tx_power", "movement_counter"):
            assert name not in dumped

    def test_e1_unavailable_luminosity(self) -> None:
        record = bytearray(E1_ADVERTISEMENT[4:])
        record[19:22] = b"\xff\xff\xff"
        reading = decode_payload(bytes(record))

        assert reading.luminosity is None

    def test_unknown_format_raises(self) -> None:
        with pytest.raises(PayloadDecodeError, match="Unsupported data format 0x03"):
            decode_payload(bytes.fromhex("03" + "00" * 13))

    def test_wrong_length_raises(self) -> None:
        with pytest.raises(PayloadDecodeError, match="expects 24 bytes, got 23") as exc_info:
            decode_payload(bytes.fromhex("050FE0337CC4ABFC1400340024A5B6EBA544DD1992CB60"))
        assert exc_info.value.payload[0] == 0x05

    def test_empty_payload_raises(self) -> None:
        with pytest.raises(PayloadDecodeError):
            decode_payload(b"")


# ------------------------------------------------------------------
# Advertisement level selection
# ------------------------------------------------------------------


class TestDecodeAdvertisement:
    def test_standard_advertisement(self) -> None:
        outcome = decode_advertisement(V5_ADVERTISEMENT)

        assert outcome.ok
        assert outcome.vendor_found
        assert outcome.failures == ()
        assert outcome.framing_error is None
        assert isinstance(outcome.reading, ReadingV5)

    def test_e1_advertisement_without_flags(self) -> None:
        outcome = decode_advertisement(E1_ADVERTISEMENT)

        assert isinstance(outcome.reading, ReadingE1)

    def test_no_manufacturer_data(self) -> None:
        outcome = decode_advertisement(bytes.fromhex("020106"))

        assert outcome.reading is None
        assert not outcome.vendor_found
        assert outcome.failures == ()

    def test_other_vendor_is_ignored(self) -> None:
        outcome = decode_advertisement(bytes.fromhex("020106" "07FF4C0002150102"))

        assert outcome.reading is None
        assert not outcome.vendor_found

    def test_short_manufacturer_structure_is_skipped(self) -> None:
        outcome = decode_advertisement(bytes.fromhex("02FF99"))

        assert not outcome.vendor_found

    def test_last_structure_wins(self) -> None:
        data = V5_ADVERTISEMENT + bytes.fromhex(V5_SECOND_STRUCTURE)

        outcome = decode_advertisement(data)

        assert isinstance(outcome.reading, ReadingV5)
        assert outcome.reading.mac == "DE:4F:BC:29:EC:B5"
        assert outcome.reading.measurement_sequence == 61038

    def test_failed_later_structure_keeps_earlier_reading(self) -> None:
        data = V5_ADVERTISEMENT + _manufacturer_structure(b"\x07")

        outcome = decode_advertisement(data)

        assert isinstance(outcome.reading, ReadingV5)
        assert outcome.reading.mac == "DD:19:92:CB:60:21"
        assert len(outcome.failures) == 1
        assert "0x07" in outcome.failures[0].reason
        assert outcome.failures[0].payload == bytes.fromhex("990407")

    def test_decode_failure_is_reported_not_raised(self) -> None:
        outcome = decode_advertisement(_manufacturer_structure(bytes.fromhex("050FE0")))

        assert outcome.reading is None
        assert outcome.vendor_found
        assert len(outcome.failures) == 1

    def test_framing_error_keeps_earlier_structures(self) -> None:
        data = V5_ADVERTISEMENT + bytes.fromhex("0AFF99")

        outcome = decode_advertisement(data)

        assert isinstance(outcome.reading, ReadingV5)
        assert outcome.framing_error is not None
        assert outcome.framing_error.declared_length == 10

    def test_custom_manufacturer_id(self) -> None:
        data = _manufacturer_structure(V6_RECORD, company_id=0x1234)

        assert decode_advertisement(data).reading is None
        assert isinstance(decode_advertisement(data, manufacturer_id=0x1234).reading, ReadingV6)


def test_split_manufacturer_data_is_little_endian() -> None:
    assert split_manufacturer_data(bytes.fromhex("9904AB")) == (0x0499, b"\xab")
    assert split_manufacturer_data(b"\x99") is None
