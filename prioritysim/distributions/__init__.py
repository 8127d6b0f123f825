"""Random variate sources for arrival gaps and service times."""

from prioritysim.distributions.variates import NumpyVariateSource, VariateSource

__all__ = [
    "NumpyVariateSource",
    "VariateSource",
]
