"""A server that holds at most one request at a time."""

from __future__ import annotations

import logging

from prioritysim.distributions.variates import VariateSource
from prioritysim.entities.request import Request
from prioritysim.errors import InvariantViolation

logger = logging.getLogger(__name__)


class Device:
    """A single-occupancy server with exponentially distributed service time.

    Args:
        device_id: Index in [0, D).
        mean_service_time: Mean of the exponential service time.
        variates: Shared variate source.

    Raises:
        ValueError: If mean_service_time is not positive.
    """

    def __init__(self, device_id: int, mean_service_time: float, variates: VariateSource):
        if mean_service_time <= 0:
            raise ValueError(f"mean_service_time must be > 0, got {mean_service_time}")
        self.device_id = device_id
        self.mean_service_time = mean_service_time
        self._variates = variates
        self._current: Request | None = None

    @property
    def name(self) -> str:
        return f"D{self.device_id + 1}"

    @property
    def current_request(self) -> Request | None:
        return self._current

    def is_free(self) -> bool:
        return self._current is None

    def service_time(self) -> float:
        """Draw a service duration for the next request."""
        return self._variates.next_exponential(self.mean_service_time)

    def start_service(self, request: Request, now: float) -> None:
        """Take ownership of ``request`` and stamp its service start time.

        Raises:
            InvariantViolation: If the device already holds a request.
        """
        if self._current is not None:
            logger.error("[%s] start_service while busy with %r", self.name, self._current)
            raise InvariantViolation(
                f"Device {self.name} is busy with {self._current!r}, cannot start {request!r}"
            )
        request.service_start_time = now
        self._current = request

    def finish_service(self) -> Request:
        """Release and return the request in service.

        Raises:
            InvariantViolation: If the device is free.
        """
        if self._current is None:
            logger.error("[%s] finish_service while free", self.name)
            raise InvariantViolation(f"Device {self.name} has no request in service")
        finished, self._current = self._current, None
        return finished

    def __repr__(self) -> str:
        state = "free" if self.is_free() else f"serving {self._current!r}"
        return f"Device({self.name}, mean={self.mean_service_time}, {state})"
