from __future__ import annotations

import logging
from collections.abc import Sequence

from prioritysim.entities.device import Device

logger = logging.getLogger(__name__)


class RoundRobinSelector:
    """Round-robin choice of a free device over the whole pool.

    Each scan starts just after the device returned last time, wrapping around
    the pool, and returns the first free device in that rotated order. The
    cursor moves only on success. Selection is not tied to the device that
    most recently finished; fairness is a single rotation over every device.
    """

    def __init__(self):
        self._last_index = -1

    @property
    def last_index(self) -> int:
        """Index of the device returned by the last successful selection, or -1."""
        return self._last_index

    def select_free(self, devices: Sequence[Device]) -> Device | None:
        if not devices:
            return None

        pool_size = len(devices)
        start = (self._last_index + 1) % pool_size
        for offset in range(pool_size):
            index = (start + offset) % pool_size
            if devices[index].is_free():
                self._last_index = index
                return devices[index]

        logger.debug("No free device among %d", pool_size)
        return None
