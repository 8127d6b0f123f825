"""Counters fed by the engine as requests are generated, rejected and served."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from prioritysim.entities.request import Request
from prioritysim.errors import InvariantViolation

logger = logging.getLogger(__name__)


@dataclass
class SourceCounters:
    """Running totals for one source."""

    generated: int = 0
    served: int = 0
    rejected: int = 0
    total_sojourn_time: float = 0.0
    total_waiting_time: float = 0.0

    @property
    def rejection_probability(self) -> float:
        return self.rejected / self.generated if self.generated > 0 else 0.0

    @property
    def mean_sojourn_time(self) -> float:
        return self.total_sojourn_time / self.served if self.served > 0 else 0.0

    @property
    def mean_waiting_time(self) -> float:
        return self.total_waiting_time / self.served if self.served > 0 else 0.0


@dataclass
class DeviceCounters:
    """Running totals for one device."""

    served: int = 0
    busy_time: float = 0.0

    def utilization(self, elapsed: float) -> float:
        return self.busy_time / elapsed if elapsed > 0 else 0.0


class StatisticsCollector:
    """Global, per-source and per-device accumulators owned by the engine.

    Args:
        num_sources: Number of sources; ids are 0..num_sources-1.
        num_devices: Number of devices; ids are 0..num_devices-1.
    """

    def __init__(self, num_sources: int, num_devices: int):
        self.sources = [SourceCounters() for _ in range(num_sources)]
        self.devices = [DeviceCounters() for _ in range(num_devices)]
        self.generated = 0
        self.served = 0
        self.rejected = 0

    def record_generated(self, source_id: int) -> int:
        """Count a new request and return its 1-based per-source sequence number."""
        self.generated += 1
        counters = self.sources[source_id]
        counters.generated += 1
        return counters.generated

    def record_rejected(self, request: Request) -> None:
        self.rejected += 1
        self.sources[request.source_id].rejected += 1

    def record_served(self, request: Request, device_id: int) -> None:
        """Accumulate sojourn, waiting and busy time of a completed request."""
        sojourn = request.sojourn_time
        waiting = request.waiting_time
        if not sojourn >= waiting >= 0:
            logger.error("Inconsistent timing for %r: sojourn=%f waiting=%f", request, sojourn, waiting)
            raise InvariantViolation(f"{request!r} has sojourn {sojourn} < waiting {waiting} or negative wait")

        self.served += 1
        counters = self.sources[request.source_id]
        counters.served += 1
        counters.total_sojourn_time += sojourn
        counters.total_waiting_time += waiting

        device = self.devices[device_id]
        device.served += 1
        device.busy_time += request.service_duration
