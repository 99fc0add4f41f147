"""Bluetooth LE advertising data scanner.

An advertisement buffer is a concatenation of AD structures::

    [length][ad_type][payload ...]

where ``length`` counts the type byte plus the payload.  The scanner is a
plain generator: it yields :class:`AdStructure` items in buffer order and,
when a structure claims more bytes than remain, yields a single
:class:`TruncatedStructure` and stops.  Nothing is raised.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class AdStructure:
    """One advertising data structure."""

    ad_type: int
    payload: bytes

    @property
    def encoded_size(self) -> int:
        """Bytes this structure occupies in the buffer, length byte included."""
        return 2 + len(self.payload)


@dataclass(frozen=True)
class TruncatedStructure:
    """Terminal framing failure: a length byte points past the end of the buffer."""

    offset: int
    declared_length: int
    available: int

    def __str__(self) -> str:
        return (
            f"AD structure at offset {self.offset} declares {self.declared_length} bytes "
            f"but only {self.available} remain"
        )


def iter_ad_structures(data: bytes) -> Iterator[AdStructure | TruncatedStructure]:
    """Lazily split *data* into AD structures.

    A zero length byte starts the (optional) zero padding at the end of an
    advertisement, so iteration stops there without reporting a failure.
    """
    view = memoryview(data)
    offset = 0
    end = len(view)
    while offset < end:
        length = view[offset]
        if length == 0:
            return
        available = end - offset - 1
        if available < length:
            yield TruncatedStructure(offset=offset, declared_length=length, available=available)
            return
        ad_type = view[offset + 1]
        payload = bytes(view[offset + 2 : offset + 1 + length])
        offset += 1 + length
        yield AdStructure(ad_type=ad_type, payload=payload)


def split_ad_structures(data: bytes) -> tuple[list[AdStructure], TruncatedStructure | None]:
    """Eagerly scan *data*, separating the structures from a framing failure."""
    structures: list[AdStructure] = []
    failure: TruncatedStructure | None = None
    for item in iter_ad_structures(data):
        if isinstance(item, TruncatedStructure):
            failure = item
        else:
            structures.append(item)
    return structures, failure
