"""ruuvigw - Ruuvi Gateway ingestion endpoint with a plaintext metrics export."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ruuvigw")
except PackageNotFoundError:
    __version__ = "0+local"

from ruuvigw.advertisement import AdStructure, TruncatedStructure, iter_ad_structures, split_ad_structures
from ruuvigw.config import ExporterConfig
from ruuvigw.decoding import DecodeFailure, DecodeOutcome, decode_advertisement, decode_payload
from ruuvigw.exceptions import EnvelopeError, PayloadDecodeError, RuuviConfigError, RuuviError
from ruuvigw.ingestion import IngestionReport, apply_gateway_message, parse_gateway_request
from ruuvigw.labels import LabelLookup, LabelMapping
from ruuvigw.metrics import collect_metrics
from ruuvigw.models import GatewayEnvelope, GatewayMessage, Reading, ReadingE1, ReadingV5, ReadingV6, TagMessage
from ruuvigw.state import GatewayState, MeasurementStore, SensorRecord, StoreSnapshot

__all__ = [
    "__version__",
    "AdStructure",
    "DecodeFailure",
    "DecodeOutcome",
    "EnvelopeError",
    "ExporterConfig",
    "GatewayEnvelope",
    "GatewayMessage",
    "GatewayState",
    "IngestionReport",
    "LabelLookup",
    "LabelMapping",
    "MeasurementStore",
    "PayloadDecodeError",
    "Reading",
    "ReadingE1",
    "ReadingV5",
    "ReadingV6",
    "RuuviConfigError",
    "RuuviError",
    "SensorRecord",
    "StoreSnapshot",
    "TagMessage",
    "TruncatedStructure",
    "apply_gateway_message",
    "collect_metrics",
    "decode_advertisement",
    "decode_payload",
    "iter_ad_structures",
    "parse_gateway_request",
    "split_ad_structures",
]
