"""Plaintext metrics export."""

from ruuvigw.metrics.collector import collect_metrics
from ruuvigw.metrics.exposition import LabelSet, escape_label_value, format_value, labelset, sample_line

__all__ = [
    "LabelSet",
    "collect_metrics",
    "escape_label_value",
    "format_value",
    "labelset",
    "sample_line",
]
