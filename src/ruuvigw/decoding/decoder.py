"""Manufacturer data selection.

Walks the AD structures of one advertisement, keeps the manufacturer
specific ones carrying the Ruuvi company identifier and decodes them.
Failures are collected on the returned :class:`DecodeOutcome` rather than
raised, so a caller can log them and carry on with the next tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ruuvigw._constants import AD_TYPE_MANUFACTURER_DATA, RUUVI_MANUFACTURER_ID
from ruuvigw.advertisement import TruncatedStructure, iter_ad_structures
from ruuvigw.decoding.formats import decode_payload
from ruuvigw.exceptions import PayloadDecodeError
from ruuvigw.models.readings import Reading


@dataclass(frozen=True)
class DecodeFailure:
    """A Ruuvi manufacturer structure that could not be decoded."""

    payload: bytes
    reason: str


@dataclass(frozen=True)
class DecodeOutcome:
    """Result of decoding one advertisement buffer.

    ``reading`` is the last successfully decoded Ruuvi structure, or
    ``None``.  ``vendor_found`` tells "no Ruuvi data at all" apart from
    "Ruuvi data that failed to decode".
    """

    reading: Reading | None = None
    vendor_found: bool = False
    failures: tuple[DecodeFailure, ...] = ()
    framing_error: TruncatedStructure | None = None

    @property
    def ok(self) -> bool:
        return self.reading is not None


@dataclass
class _Accumulator:
    reading: Reading | None = None
    vendor_found: bool = False
    failures: list[DecodeFailure] = field(default_factory=list)
    framing_error: TruncatedStructure | None = None

    def freeze(self) -> DecodeOutcome:
        return DecodeOutcome(
            reading=self.reading,
            vendor_found=self.vendor_found,
            failures=tuple(self.failures),
            framing_error=self.framing_error,
        )


def split_manufacturer_data(payload: bytes) -> tuple[int, bytes] | None:
    """Split manufacturer data into ``(company_id, rest)``.

    The company identifier is little-endian.  Returns ``None`` when the
    payload is too short to carry one.
    """
    if len(payload) < 2:
        return None
    return int.from_bytes(payload[:2], "little"), payload[2:]


def decode_advertisement(
    data: bytes,
    *,
    manufacturer_id: int = RUUVI_MANUFACTURER_ID,
) -> DecodeOutcome:
    """Decode the Ruuvi reading carried by a raw advertisement buffer.

    When the advertisement holds several matching manufacturer
    structures, the last one that decodes wins.
    """
    acc = _Accumulator()
    for item in iter_ad_structures(data):
        if isinstance(item, TruncatedStructure):
            acc.framing_error = item
            break
        if item.ad_type != AD_TYPE_MANUFACTURER_DATA:
            continue
        split = split_manufacturer_data(item.payload)
        if split is None:
            continue
        company_id, payload = split
        if company_id != manufacturer_id:
            continue
        acc.vendor_found = True
        try:
            acc.reading = decode_payload(payload)
        except PayloadDecodeError as exc:
            acc.failures.append(DecodeFailure(payload=item.payload, reason=str(exc)))
    return acc.freeze()
