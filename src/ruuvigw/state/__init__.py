"""State/store layer.

The single place where decoded readings from ingestion requests are kept
and from which the metrics endpoint reads.
"""

from ruuvigw.state.store import GatewayState, MeasurementStore, SensorRecord, StoreSnapshot

__all__ = [
    "GatewayState",
    "MeasurementStore",
    "SensorRecord",
    "StoreSnapshot",
]
