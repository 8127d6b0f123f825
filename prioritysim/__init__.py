"""prioritysim: discrete-event simulation of a finite queueing network.

Sources emit requests that are served by a small pool of devices chosen
round-robin. Requests that find every device busy wait in a bounded buffer
that extracts by packet and source priority and evicts the lowest-priority
occupant when full.

The library is silent by default. Enable logging with
``prioritysim.enable_console_logging()`` or ``prioritysim.configure_from_env()``.
"""

import logging

logging.getLogger("prioritysim").addHandler(logging.NullHandler())

from prioritysim.config import DeviceConfig, SimulationConfig, SourceConfig
from prioritysim.core import Clock, Event, EventCalendar, EventKind
from prioritysim.distributions import NumpyVariateSource, VariateSource
from prioritysim.entities import (
    AdmissionBuffer,
    Device,
    PacketMarker,
    Request,
    RoundRobinSelector,
    Source,
)
from prioritysim.errors import InvariantViolation
from prioritysim.experiments import ReplicationReport, run_replications
from prioritysim.instrumentation import (
    DeviceSummary,
    DisciplineSnapshot,
    SimulationSummary,
    SourceSummary,
    StatisticsCollector,
)
from prioritysim.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from prioritysim.simulation import RunState, Simulation, StopReason

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "DeviceConfig",
    "SimulationConfig",
    "SourceConfig",
    # Engine
    "Clock",
    "Event",
    "EventCalendar",
    "EventKind",
    "RunState",
    "Simulation",
    "StopReason",
    # Entities
    "AdmissionBuffer",
    "Device",
    "PacketMarker",
    "Request",
    "RoundRobinSelector",
    "Source",
    # Randomness
    "NumpyVariateSource",
    "VariateSource",
    # Results
    "DeviceSummary",
    "DisciplineSnapshot",
    "ReplicationReport",
    "SimulationSummary",
    "SourceSummary",
    "StatisticsCollector",
    "run_replications",
    # Errors
    "InvariantViolation",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
