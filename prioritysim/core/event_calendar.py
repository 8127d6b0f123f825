from __future__ import annotations

import heapq
import logging
from itertools import count
from typing import TYPE_CHECKING

from prioritysim.core.event import Event, EventKind

if TYPE_CHECKING:
    from prioritysim.entities.request import Request

logger = logging.getLogger(__name__)


class EventCalendar:
    def __init__(self):
        """Time-ordered store of pending events.

        Events are stored directly on the heap; Event implements ordering by
        (time, sequence) so there is no need for (time, event) tuples. The
        calendar is unbounded and never interprets what an event means.
        """
        self._heap: list[Event] = []
        self._sequence = count()

    def schedule(
        self,
        time: float,
        kind: EventKind,
        target_id: int,
        request: Request | None = None,
    ) -> Event:
        event = Event(
            time=time,
            kind=kind,
            target_id=target_id,
            request=request,
            sequence=next(self._sequence),
        )
        heapq.heappush(self._heap, event)
        logger.debug("Scheduled %s for target %d at %.6f", kind.value, target_id, time)
        return event

    def pop_earliest(self) -> Event | None:
        """Remove and return the earliest event, or None when the calendar is empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)

    def peek(self) -> Event | None:
        return self._heap[0] if self._heap else None

    def has_events(self) -> bool:
        return bool(self._heap)

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)
