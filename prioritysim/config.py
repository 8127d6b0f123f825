"""Run configuration.

The topology (sources, devices, buffer capacity) and the run limits are fixed
when a Simulation is built and never change during the run.

Example:
    config = SimulationConfig(
        sources=[SourceConfig(1.5, 2.5), SourceConfig(2.0, 3.0)],
        devices=[DeviceConfig(mean_service_time=2.0)],
        buffer_capacity=3,
        max_time=500.0,
    )

    # Or the reference topology with a different seed
    config = SimulationConfig.default().with_overrides(seed=7)
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SourceConfig:
    """Uniform inter-arrival interval [min_interval, max_interval) of one source."""

    min_interval: float
    max_interval: float

    def __post_init__(self):
        if self.min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {self.min_interval}")
        if self.max_interval < self.min_interval:
            raise ValueError(
                f"max_interval must be >= min_interval, got [{self.min_interval}, {self.max_interval})"
            )
        if self.max_interval <= 0:
            raise ValueError("interval [0, 0) would schedule infinitely many arrivals at one instant")


@dataclass(frozen=True)
class DeviceConfig:
    """Mean of the exponential service time of one device."""

    mean_service_time: float

    def __post_init__(self):
        if not self.mean_service_time > 0:
            raise ValueError(f"mean_service_time must be > 0, got {self.mean_service_time}")


@dataclass(frozen=True)
class SimulationConfig:
    """Complete description of one run.

    Attributes:
        sources: One entry per source; list position is the source id.
        devices: One entry per device; list position is the device id.
        buffer_capacity: Maximum number of buffered requests.
        max_time: Stop once the simulated clock reaches this value.
        max_served: Stop once this many requests have completed service.
        seed: Seed for the default variate source (None = fresh entropy).
    """

    sources: tuple[SourceConfig, ...]
    devices: tuple[DeviceConfig, ...]
    buffer_capacity: int
    max_time: float = 1000.0
    max_served: int = 1000
    seed: int | None = field(default=None)

    def __post_init__(self):
        # Accept lists for convenience but store tuples so the config stays hashable
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(self, "devices", tuple(self.devices))

        if not self.sources:
            raise ValueError("at least one source is required")
        if not self.devices:
            raise ValueError("at least one device is required")
        if self.buffer_capacity < 1:
            raise ValueError(f"buffer_capacity must be >= 1, got {self.buffer_capacity}")
        if math.isnan(self.max_time) or self.max_time < 0:
            raise ValueError(f"max_time must be >= 0, got {self.max_time}")
        if self.max_served < 0:
            raise ValueError(f"max_served must be >= 0, got {self.max_served}")

    @property
    def num_sources(self) -> int:
        return len(self.sources)

    @property
    def num_devices(self) -> int:
        return len(self.devices)

    @classmethod
    def default(cls) -> SimulationConfig:
        """The reference topology: 3 sources, 2 devices, buffer of 3."""
        return cls(
            sources=tuple(SourceConfig(1.5 + i * 0.5, 2.5 + i * 0.5) for i in range(3)),
            devices=tuple(DeviceConfig(2.0 + i * 1.0) for i in range(2)),
            buffer_capacity=3,
            max_time=1000.0,
            max_served=1000,
        )

    def with_overrides(self, **changes: Any) -> SimulationConfig:
        """Return a copy with the given fields replaced.

        Every value is applied as given, so ``seed=None`` clears a seed.
        """
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["sources"] = [asdict(s) for s in self.sources]
        data["devices"] = [asdict(d) for d in self.devices]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationConfig:
        """Build a config from plain data, e.g. parsed JSON.

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        try:
            sources = [SourceConfig(**s) for s in data["sources"]]
            devices = [DeviceConfig(**d) for d in data["devices"]]
            capacity = data["buffer_capacity"]
        except KeyError as e:
            raise ValueError(f"missing configuration key: {e.args[0]}") from e
        except TypeError as e:
            raise ValueError(f"malformed configuration: {e}") from e

        optional = {k: data[k] for k in ("max_time", "max_served", "seed") if k in data}
        return cls(sources=sources, devices=devices, buffer_capacity=capacity, **optional)

    @classmethod
    def from_json_file(cls, path: str | Path) -> SimulationConfig:
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
