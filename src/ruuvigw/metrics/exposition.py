"""Plaintext exposition primitives.

Renders single sample lines of the form::

    name{key1="value1",key2="value2"} value

Label sets are ordered; labels appear in the order they were added.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def escape_label_value(value: str) -> str:
    """Escape backslash, double quote and newline in a label value."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_value(value: int | float) -> str:
    """Render a sample value.

    Integers and integral floats print without a decimal point
    (``1609459200``), other floats use the shortest round-trip
    representation (``0.3295``).
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class LabelSet:
    """Immutable ordered label pairs."""

    labels: tuple[tuple[str, str], ...] = ()

    def label(self, key: str, value: str) -> LabelSet:
        return LabelSet(self.labels + ((key, value),))

    def render(self) -> str:
        if not self.labels:
            return ""
        body = ",".join(f'{key}="{escape_label_value(value)}"' for key, value in self.labels)
        return f"{{{body}}}"


def labelset() -> LabelSet:
    return LabelSet()


def sample_line(name: str, labels: LabelSet, value: int | float) -> str:
    """One sample line, without the trailing newline."""
    return f"{name}{labels.render()} {format_value(value)}"
