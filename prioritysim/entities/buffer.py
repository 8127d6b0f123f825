"""Bounded admission buffer with source-priority selection and eviction.

Requests enter in arrival order but do not leave in that order. Extraction
follows the packet discipline: keep serving the source whose packet is in
progress while it still has buffered requests, otherwise start a new packet
with the highest-priority (lowest id) source present. When a request must be
admitted into a full buffer, the occupant from the lowest-priority (highest
id) source is evicted, whatever the priority of the newcomer.

Example:
    buffer = AdmissionBuffer(capacity=3)
    marker = PacketMarker()

    buffer.insert(request)
    nxt = buffer.select_next(marker)
    if nxt is not None:
        buffer.remove(nxt)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from prioritysim.entities.request import Request
from prioritysim.errors import InvariantViolation

logger = logging.getLogger(__name__)


class PacketMarker:
    """The source whose packet is currently being served, or None.

    Owned by the engine and handed to AdmissionBuffer.select_next(), which
    reads and updates it.
    """

    def __init__(self, source_id: int | None = None):
        self.source_id = source_id

    @property
    def active(self) -> bool:
        return self.source_id is not None

    def clear(self) -> None:
        self.source_id = None

    def __repr__(self) -> str:
        label = "none" if self.source_id is None else f"S{self.source_id + 1}"
        return f"PacketMarker({label})"


class AdmissionBuffer:
    """Holding area for requests that found every device busy.

    Args:
        capacity: Maximum number of buffered requests (>= 1).

    Raises:
        ValueError: If capacity is less than 1.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._items: list[Request] = []
        self._peak_size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def peak_size(self) -> int:
        """Largest occupancy observed."""
        return self._peak_size

    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Request]:
        return iter(list(self._items))

    def insert(self, request: Request) -> None:
        """Append a request. The caller makes room first when the buffer is full.

        Raises:
            InvariantViolation: If the buffer is already at capacity.
        """
        if self.is_full():
            logger.error("Insert into full buffer (%d/%d): %r", len(self._items), self._capacity, request)
            raise InvariantViolation(
                f"Buffer at capacity {self._capacity}, cannot insert {request!r}"
            )
        self._items.append(request)
        self._peak_size = max(self._peak_size, len(self._items))

    def select_next(self, marker: PacketMarker) -> Request | None:
        """Pick the next request to serve under the packet discipline.

        The request is not removed; call remove() once it has been handed to a
        device. ``marker`` is updated in place:

        - If a packet is active and its source still has a buffered request,
          the earliest such request is returned and the marker is unchanged.
        - Otherwise the marker is cleared and the request with the lowest
          source id is chosen (earliest inserted among equals); the marker is
          set to that source.
        - An empty buffer returns None and clears the marker.
        """
        if not self._items:
            marker.clear()
            return None

        if marker.source_id is not None:
            for request in self._items:
                if request.source_id == marker.source_id:
                    logger.debug("Continuing packet of S%d with %r", marker.source_id + 1, request)
                    return request
            logger.debug("Packet of S%d exhausted", marker.source_id + 1)
            marker.clear()

        best: Request | None = None
        for request in self._items:
            if best is None or request.source_id < best.source_id:
                best = request

        marker.source_id = best.source_id
        logger.debug("Starting packet of S%d with %r", best.source_id + 1, best)
        return best

    def find_eviction_candidate(self) -> Request | None:
        """Return the buffered request with the highest source id, or None if empty.

        Ties go to the earliest inserted request of that source.
        """
        worst: Request | None = None
        for request in self._items:
            if worst is None or request.source_id > worst.source_id:
                worst = request
        return worst

    def remove(self, request: Request) -> None:
        """Remove ``request`` by identity.

        Raises:
            InvariantViolation: If the request is not buffered.
        """
        for index, item in enumerate(self._items):
            if item is request:
                del self._items[index]
                return
        logger.error("Remove of unbuffered request %r", request)
        raise InvariantViolation(f"{request!r} is not in the buffer")

    def count_by_source(self) -> dict[int, int]:
        counts: dict[int, int] = {}
        for request in self._items:
            counts[request.source_id] = counts.get(request.source_id, 0) + 1
        return counts
