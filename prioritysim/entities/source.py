import logging

from prioritysim.distributions.variates import VariateSource

logger = logging.getLogger(__name__)


class Source:
    """Emits requests with uniformly distributed inter-arrival gaps.

    A source holds no state beyond its parameters; all randomness comes from the
    shared variate source.

    Args:
        source_id: Index in [0, S). Lower ids have higher priority.
        min_interval: Lower bound of the inter-arrival gap.
        max_interval: Upper bound of the inter-arrival gap.
        variates: Shared variate source.

    Raises:
        ValueError: If the interval bounds are negative, reversed or both zero.
    """

    def __init__(self, source_id: int, min_interval: float, max_interval: float, variates: VariateSource):
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        if max_interval < min_interval:
            raise ValueError(
                f"max_interval must be >= min_interval, got [{min_interval}, {max_interval})"
            )
        if max_interval <= 0:
            raise ValueError("interval [0, 0) would schedule infinitely many arrivals at one instant")
        self.source_id = source_id
        self.min_interval = min_interval
        self.max_interval = max_interval
        self._variates = variates

    @property
    def name(self) -> str:
        return f"S{self.source_id + 1}"

    def next_interval(self) -> float:
        """Draw the gap until this source's next arrival."""
        return self._variates.next_uniform(self.min_interval, self.max_interval)

    def __repr__(self) -> str:
        return f"Source({self.name}, [{self.min_interval}, {self.max_interval}))"
