"""Custom exception hierarchy for ruuvigw."""

from __future__ import annotations


class RuuviError(Exception):
    """Base exception for all ruuvigw errors."""


class RuuviConfigError(RuuviError):
    """Invalid or missing configuration (options, label mapping file)."""


class PayloadDecodeError(RuuviError):
    """Manufacturer payload could not be decoded into a reading.

    Raised by :func:`ruuvigw.decoding.decode_payload` for unknown format
    tags and for records whose length does not match their layout.
    :func:`ruuvigw.decoding.decode_advertisement` never lets it escape;
    it is turned into a reported failure instead.
    """

    def __init__(self, message: str, *, payload: bytes = b"") -> None:
        self.payload = payload
        super().__init__(message)


class EnvelopeError(RuuviError):
    """Gateway ingestion request was not valid JSON or did not match the schema."""
