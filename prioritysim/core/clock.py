import logging

from prioritysim.errors import InvariantViolation

logger = logging.getLogger(__name__)


class Clock:
    """Simulated time. Advanced only by the engine as events are popped."""

    def __init__(self, start_time: float = 0.0):
        self._current_time = start_time

    @property
    def now(self) -> float:
        return self._current_time

    def update(self, time: float) -> None:
        if time < self._current_time:
            logger.error("Clock moved backwards: %.6f -> %.6f", self._current_time, time)
            raise InvariantViolation(
                f"Clock cannot move backwards (now={self._current_time}, requested={time})"
            )
        self._current_time = time
