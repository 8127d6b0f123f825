"""Simulation summary generated when a run stops.

SimulationSummary is returned by Simulation.run() and also accessible via
Simulation.summary. str(summary) renders the textual report; to_dict() and
the pandas frames expose the same numbers for further analysis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

DISCIPLINES = (
    "Infinite sources",
    "Uniform inter-arrival intervals",
    "Exponential service time",
    "Buffering with source-priority extraction",
    "Rejection by source priority",
    "Packet service",
    "Round-robin device selection",
)


@dataclass
class SourceSummary:
    """Per-source row of the report."""
    name: str
    requests: int
    served: int
    rejected: int
    pending: int
    rejection_probability: float
    mean_sojourn_time: float
    mean_waiting_time: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "requests": self.requests,
            "served": self.served,
            "rejected": self.rejected,
            "pending": self.pending,
            "rejection_probability": self.rejection_probability,
            "mean_sojourn_time": self.mean_sojourn_time,
            "mean_waiting_time": self.mean_waiting_time,
        }


@dataclass
class DeviceSummary:
    """Per-device row of the report."""
    name: str
    served: int
    busy_time: float
    utilization: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "served": self.served,
            "busy_time": self.busy_time,
            "utilization": self.utilization,
        }


@dataclass
class DisciplineSnapshot:
    """Packet and buffer state at the moment the run stopped."""
    packet_source: str | None
    buffer_size: int
    buffer_capacity: int
    buffer_peak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "packet_source": self.packet_source,
            "buffer_size": self.buffer_size,
            "buffer_capacity": self.buffer_capacity,
            "buffer_peak": self.buffer_peak,
        }


@dataclass
class SimulationSummary:
    """Auto-generated summary of a run."""
    elapsed_time: float
    stop_reason: str
    generated: int
    served: int
    rejected: int
    pending: int
    events_processed: int
    sources: list[SourceSummary] = field(default_factory=list)
    devices: list[DeviceSummary] = field(default_factory=list)
    discipline: DisciplineSnapshot | None = None

    def __str__(self) -> str:
        lines = ["=== SIMULATION RESULTS ==="]
        lines.append("Disciplines: " + "; ".join(DISCIPLINES))
        lines.append(f"Total simulation time: {self.elapsed_time:.2f} units (stopped: {self.stop_reason})")
        lines.append(f"Requests generated: {self.generated}")
        lines.append(f"Requests served: {self.served}")
        lines.append(f"Requests rejected: {self.rejected}")
        lines.append(f"Requests pending: {self.pending}")

        lines.append("")
        lines.append("--- SOURCE CHARACTERISTICS ---")
        lines.append(
            f"{'Source':>10}{'Requests':>12}{'Rejected':>12}{'P_reject':>12}{'T_total':>12}{'T_wait':>12}"
        )
        for s in self.sources:
            lines.append(
                f"{s.name:>10}{s.requests:>12}{s.rejected:>12}{s.rejection_probability:>12.3f}"
                f"{s.mean_sojourn_time:>12.2f}{s.mean_waiting_time:>12.2f}"
            )

        lines.append("")
        lines.append("--- DEVICE CHARACTERISTICS ---")
        lines.append(f"{'Device':>10}{'Utilization':>15}")
        for d in self.devices:
            lines.append(f"{d.name:>10}{d.utilization:>15.3f}")

        if self.discipline is not None:
            snap = self.discipline
            lines.append("")
            lines.append("--- DISCIPLINE ANALYSIS ---")
            lines.append(f"Packet service: Current packet = {snap.packet_source or 'none'}")
            lines.append(f"Rejections: Total rejected = {self.rejected}")
            lines.append(f"Buffer: Max size = {snap.buffer_capacity}, Current size = {snap.buffer_size}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "elapsed_time": self.elapsed_time,
            "stop_reason": self.stop_reason,
            "generated": self.generated,
            "served": self.served,
            "rejected": self.rejected,
            "pending": self.pending,
            "events_processed": self.events_processed,
            "sources": [s.to_dict() for s in self.sources],
            "devices": [d.to_dict() for d in self.devices],
            "discipline": self.discipline.to_dict() if self.discipline is not None else None,
        }

    def sources_frame(self) -> pd.DataFrame:
        """Per-source table indexed by source name."""
        return pd.DataFrame([s.to_dict() for s in self.sources]).set_index("name")

    def devices_frame(self) -> pd.DataFrame:
        """Per-device table indexed by device name."""
        return pd.DataFrame([d.to_dict() for d in self.devices]).set_index("name")
