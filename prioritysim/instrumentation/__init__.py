"""Run statistics and the end-of-run summary."""

from prioritysim.instrumentation.statistics import DeviceCounters, SourceCounters, StatisticsCollector
from prioritysim.instrumentation.summary import (
    DeviceSummary,
    DisciplineSnapshot,
    SimulationSummary,
    SourceSummary,
)

__all__ = [
    "DeviceCounters",
    "DeviceSummary",
    "DisciplineSnapshot",
    "SimulationSummary",
    "SourceCounters",
    "SourceSummary",
    "StatisticsCollector",
]
