"""Random variate sources.

Every draw in a run goes through a single VariateSource shared by all sources
and devices. Results depend on call order, so the engine calls it strictly in
event order and a fixed seed reproduces a run exactly.

Tests substitute deterministic implementations of VariateSource to pin down
arrival and service times.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

logger = logging.getLogger(__name__)


class VariateSource(ABC):
    """Capability for drawing uniform and exponential variates."""

    @abstractmethod
    def next_uniform(self, low: float, high: float) -> float:
        """Draw from the uniform distribution on [low, high)."""

    @abstractmethod
    def next_exponential(self, mean: float) -> float:
        """Draw from the exponential distribution with the given mean (>= 0)."""


class NumpyVariateSource(VariateSource):
    """VariateSource backed by a numpy Generator.

    Args:
        seed: Seed for ``numpy.random.default_rng``. None draws fresh OS entropy.
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._rng = np.random.default_rng(seed)
        logger.debug("NumpyVariateSource created: seed=%s", seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def next_uniform(self, low: float, high: float) -> float:
        return float(self._rng.uniform(low, high))

    def next_exponential(self, mean: float) -> float:
        return float(self._rng.exponential(mean))
