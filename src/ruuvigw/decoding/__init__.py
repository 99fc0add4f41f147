"""Ruuvi manufacturer data decoding."""

from ruuvigw.decoding.decoder import DecodeFailure, DecodeOutcome, decode_advertisement, split_manufacturer_data
from ruuvigw.decoding.formats import LAYOUTS, PayloadLayout, decode_payload

__all__ = [
    "LAYOUTS",
    "DecodeFailure",
    "DecodeOutcome",
    "PayloadLayout",
    "decode_advertisement",
    "decode_payload",
    "split_manufacturer_data",
]
