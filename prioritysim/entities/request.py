from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class Request:
    """A unit of work emitted by a source.

    Identity is (source_id, sequence). Comparison is by object identity so a
    buffer can remove exactly the instance it was handed even if two requests
    carry equal timestamps.

    A request is held by exactly one owner at a time: the admission buffer,
    a device, or the engine while it is being handed over.

    Attributes:
        source_id: Id of the emitting source; lower ids have higher priority.
        sequence: 1-based per-source sequence number.
        arrival_time: Simulated time the request was generated.
        service_start_time: Set once when a device starts serving it.
        completion_time: Set once when the device finishes it.
    """

    source_id: int
    sequence: int
    arrival_time: float
    service_start_time: float | None = field(default=None)
    completion_time: float | None = field(default=None)

    @property
    def waiting_time(self) -> float:
        """Service start minus arrival. Only valid once service has started."""
        if self.service_start_time is None:
            raise ValueError(f"{self!r} has not started service")
        return self.service_start_time - self.arrival_time

    @property
    def sojourn_time(self) -> float:
        """Completion minus arrival. Only valid once the request is complete."""
        if self.completion_time is None:
            raise ValueError(f"{self!r} has not completed")
        return self.completion_time - self.arrival_time

    @property
    def service_duration(self) -> float:
        if self.completion_time is None or self.service_start_time is None:
            raise ValueError(f"{self!r} has not completed")
        return self.completion_time - self.service_start_time

    def __repr__(self) -> str:
        return f"Request(S{self.source_id + 1}#{self.sequence}, arrived={self.arrival_time:.4f})"
