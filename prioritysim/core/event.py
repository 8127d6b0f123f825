"""Events that drive the simulation forward.

An event is a timestamped instruction for the engine: either a source emits a
new request (ARRIVAL) or a device finishes the request it holds (DEPARTURE).
Events are immutable once scheduled and are consumed exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prioritysim.entities.request import Request


class EventKind(Enum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"


@dataclass(frozen=True)
class Event:
    """A pending arrival or departure.

    Sorting uses (time, sequence): the calendar stamps each event with its
    insertion sequence number, so events scheduled for the same instant are
    processed in the order they were scheduled.

    Attributes:
        time: Simulated time at which the event fires.
        kind: ARRIVAL or DEPARTURE.
        target_id: Source id for arrivals, device id for departures.
        request: The request in service, carried by departures only.
        sequence: Insertion order assigned by the calendar.
    """

    time: float
    kind: EventKind
    target_id: int
    request: Request | None = field(default=None, compare=False)
    sequence: int = field(default=0, repr=False)

    def __lt__(self, other: Event) -> bool:
        if self.time != other.time:
            return self.time < other.time
        return self.sequence < other.sequence
