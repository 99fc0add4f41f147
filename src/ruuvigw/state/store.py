"""Thread-safe in-memory measurement store.

Holds the gateway bookkeeping and the latest record per tag.  Updates are
last-write-wins in arrival order: nothing here compares timestamps, so a
late request carrying older data still replaces what is stored.

Records are immutable models, which makes a snapshot a plain copy of the
map taken under the lock.  Decoding happens before :meth:`upsert_batch`
and formatting after :meth:`snapshot`; neither runs while the lock is
held.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from pydantic import Field

from ruuvigw.models._base import UNIX_EPOCH, RuuviBaseModel
from ruuvigw.models.readings import Reading


class GatewayState(RuuviBaseModel):
    """Bookkeeping from the most recent ingestion request."""

    last_update: datetime = UNIX_EPOCH
    last_nonce: int | None = Field(default=None, ge=0)
    mac: str = ""


class SensorRecord(RuuviBaseModel):
    """Latest decoded reading of one tag."""

    last_seen: datetime
    rssi: int
    reading: Reading


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only view of the store at one point in time."""

    gateway: GatewayState = field(default_factory=GatewayState)
    sensors: Mapping[str, SensorRecord] = field(default_factory=lambda: MappingProxyType({}))

    def sorted_sensors(self) -> list[tuple[str, SensorRecord]]:
        """Tag records in ascending order of tag id."""
        return sorted(self.sensors.items(), key=lambda item: item[0])


class MeasurementStore:
    """Latest gateway state and per-tag records, guarded by one lock.

    A single instance is created at startup and shared by the ingestion
    and scrape handlers.  There is no removal API; tags stay for the
    lifetime of the process.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._gateway = GatewayState()
        self._sensors: dict[str, SensorRecord] = {}

    def upsert_gateway(self, gateway: GatewayState) -> None:
        """Replace the gateway record."""
        with self._lock:
            self._gateway = gateway

    def upsert_sensor(self, tag_id: str, record: SensorRecord) -> None:
        """Insert or replace the record for *tag_id*."""
        with self._lock:
            self._sensors[tag_id] = record

    def upsert_batch(
        self,
        gateway: GatewayState,
        records: Iterable[tuple[str, SensorRecord]],
    ) -> None:
        """Apply a gateway record and tag records under one lock acquisition.

        *records* should already be materialized; it is consumed while the
        lock is held.
        """
        with self._lock:
            self._gateway = gateway
            for tag_id, record in records:
                self._sensors[tag_id] = record

    def snapshot(self) -> StoreSnapshot:
        """Copy the current state for serialization."""
        with self._lock:
            gateway = self._gateway
            sensors = dict(self._sensors)
        return StoreSnapshot(gateway=gateway, sensors=MappingProxyType(sensors))

    def get(self, tag_id: str) -> SensorRecord | None:
        with self._lock:
            return self._sensors.get(tag_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sensors)

    def __contains__(self, tag_id: object) -> bool:
        with self._lock:
            return tag_id in self._sensors
