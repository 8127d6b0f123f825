"""Discrete-event engine for the finite source/buffer/device network.

The engine pops the earliest event from the calendar, advances the clock to
its timestamp and dispatches it:

- ARRIVAL: the source emits a request and schedules its own next arrival. The
  request goes to a free device chosen round-robin, or into the admission
  buffer, evicting the lowest-priority buffered request if the buffer is full.
- DEPARTURE: the device releases its request, statistics are recorded and the
  next buffered request under the packet discipline is started on a free
  device.

The run stops when the calendar is empty, the clock reaches max_time, or
max_served requests have completed. The stop conditions are checked before
each event, so the last processed event may lie past max_time.

Example:
    from prioritysim import Simulation, SimulationConfig

    sim = Simulation(SimulationConfig.default().with_overrides(seed=42))
    summary = sim.run()
    print(summary)
"""

from __future__ import annotations

import logging
from enum import Enum

from prioritysim.config import SimulationConfig
from prioritysim.core.clock import Clock
from prioritysim.core.event import Event, EventKind
from prioritysim.core.event_calendar import EventCalendar
from prioritysim.distributions.variates import NumpyVariateSource, VariateSource
from prioritysim.entities.buffer import AdmissionBuffer, PacketMarker
from prioritysim.entities.device import Device
from prioritysim.entities.device_selector import RoundRobinSelector
from prioritysim.entities.request import Request
from prioritysim.entities.source import Source
from prioritysim.errors import InvariantViolation
from prioritysim.instrumentation.statistics import StatisticsCollector
from prioritysim.instrumentation.summary import (
    DeviceSummary,
    DisciplineSnapshot,
    SimulationSummary,
    SourceSummary,
)

logger = logging.getLogger(__name__)


class RunState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class StopReason(Enum):
    CALENDAR_EMPTY = "calendar_empty"
    MAX_TIME = "max_time"
    MAX_SERVED = "max_served"


class Simulation:
    """One run of the network described by a SimulationConfig.

    Every source has its first arrival scheduled on construction, so a new
    Simulation is already RUNNING.

    Args:
        config: Topology and run limits.
        variates: Variate source shared by all sources and devices. Defaults to
            a NumpyVariateSource seeded with ``config.seed``.
    """

    def __init__(self, config: SimulationConfig, variates: VariateSource | None = None):
        self._config = config
        self._variates = variates if variates is not None else NumpyVariateSource(config.seed)

        self._clock = Clock(0.0)
        self._calendar = EventCalendar()

        self.sources = [
            Source(i, sc.min_interval, sc.max_interval, self._variates)
            for i, sc in enumerate(config.sources)
        ]
        self.devices = [
            Device(i, dc.mean_service_time, self._variates)
            for i, dc in enumerate(config.devices)
        ]
        self.buffer = AdmissionBuffer(config.buffer_capacity)
        self.selector = RoundRobinSelector()
        self.marker = PacketMarker()
        self.stats = StatisticsCollector(len(self.sources), len(self.devices))

        self._events_processed = 0
        self._stop_reason: StopReason | None = None
        self._summary: SimulationSummary | None = None

        for source in self.sources:
            self._calendar.schedule(source.next_interval(), EventKind.ARRIVAL, source.source_id)
        self._state = RunState.RUNNING

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def now(self) -> float:
        return self._clock.now

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def stop_reason(self) -> StopReason | None:
        return self._stop_reason

    @property
    def calendar(self) -> EventCalendar:
        return self._calendar

    @property
    def events_processed(self) -> int:
        return self._events_processed

    @property
    def summary(self) -> SimulationSummary | None:
        """Summary of the finished run, or None while it is still running."""
        return self._summary

    def run(self) -> SimulationSummary:
        """Process events until a stop condition holds and return the summary."""
        logger.info(
            "Simulation starting: %d sources, %d devices, buffer=%d, max_time=%s, max_served=%d",
            len(self.sources),
            len(self.devices),
            self.buffer.capacity,
            self._config.max_time,
            self._config.max_served,
        )
        while self.step() is not None:
            pass
        return self._summary

    def step(self) -> Event | None:
        """Process a single event.

        Returns:
            The processed event, or None once the run has stopped.
        """
        if self._state is RunState.STOPPED:
            return None

        reason = self._check_stop()
        if reason is not None:
            self._stop(reason)
            return None

        event = self._calendar.pop_earliest()
        self._clock.update(event.time)
        self._events_processed += 1

        if event.kind is EventKind.ARRIVAL:
            self._handle_arrival(event.target_id)
        elif event.kind is EventKind.DEPARTURE:
            self._handle_departure(event)

        return event

    def _check_stop(self) -> StopReason | None:
        if not self._calendar.has_events():
            return StopReason.CALENDAR_EMPTY
        if self._clock.now >= self._config.max_time:
            return StopReason.MAX_TIME
        if self.stats.served >= self._config.max_served:
            return StopReason.MAX_SERVED
        return None

    def _stop(self, reason: StopReason) -> None:
        self._stop_reason = reason
        self._state = RunState.STOPPED
        self._summary = self._build_summary()
        logger.info(
            "Simulation stopped (%s) at t=%.4f: generated=%d served=%d rejected=%d pending=%d",
            reason.value,
            self._clock.now,
            self.stats.generated,
            self.stats.served,
            self.stats.rejected,
            self._summary.pending,
        )

    def _handle_arrival(self, source_id: int) -> None:
        now = self._clock.now
        source = self.sources[source_id]

        sequence = self.stats.record_generated(source_id)
        request = Request(source_id=source_id, sequence=sequence, arrival_time=now)

        self._calendar.schedule(now + source.next_interval(), EventKind.ARRIVAL, source_id)

        device = self.selector.select_free(self.devices)
        if device is not None:
            self._start_service(device, request)
        else:
            self._admit(request)

    def _admit(self, request: Request) -> None:
        """Place a request that found every device busy into the buffer."""
        if self.buffer.is_full():
            victim = self.buffer.find_eviction_candidate()
            if victim is None:
                logger.error("Full buffer yielded no eviction candidate")
                raise InvariantViolation("buffer reports full but has no eviction candidate")
            self.buffer.remove(victim)
            self.stats.record_rejected(victim)
            logger.debug(
                "Evicted %r to admit %r", victim, request, extra={"sim_time": self._clock.now}
            )

        self.buffer.insert(request)
        logger.debug(
            "Buffered %r (%d/%d)",
            request,
            self.buffer.size(),
            self.buffer.capacity,
            extra={"sim_time": self._clock.now},
        )

    def _handle_departure(self, event: Event) -> None:
        now = self._clock.now
        device = self.devices[event.target_id]

        finished = device.finish_service()
        if event.request is not None and finished is not event.request:
            logger.error("[%s] departed %r but event carried %r", device.name, finished, event.request)
            raise InvariantViolation(f"Device {device.name} released a different request")

        finished.completion_time = now
        self.stats.record_served(finished, device.device_id)
        logger.debug("[%s] completed %r", device.name, finished, extra={"sim_time": now})

        if self.buffer.is_empty():
            return

        next_request = self.buffer.select_next(self.marker)
        if next_request is None:
            return
        self.buffer.remove(next_request)

        free_device = self.selector.select_free(self.devices)
        if free_device is None:
            logger.error("No free device right after %s departed", device.name)
            raise InvariantViolation(f"no free device after departure from {device.name}")
        self._start_service(free_device, next_request)

    def _start_service(self, device: Device, request: Request) -> None:
        now = self._clock.now
        service_time = device.service_time()
        device.start_service(request, now)
        self._calendar.schedule(now + service_time, EventKind.DEPARTURE, device.device_id, request)
        logger.debug(
            "[%s] started %r for %.4f", device.name, request, service_time, extra={"sim_time": now}
        )

    def pending_by_source(self) -> list[int]:
        """Requests per source still buffered or in service."""
        pending = [0] * len(self.sources)
        for source_id, count in self.buffer.count_by_source().items():
            pending[source_id] += count
        for device in self.devices:
            if device.current_request is not None:
                pending[device.current_request.source_id] += 1
        return pending

    def _build_summary(self) -> SimulationSummary:
        elapsed = self._clock.now
        pending = self.pending_by_source()

        sources = [
            SourceSummary(
                name=source.name,
                requests=counters.generated,
                served=counters.served,
                rejected=counters.rejected,
                pending=pending[source.source_id],
                rejection_probability=counters.rejection_probability,
                mean_sojourn_time=counters.mean_sojourn_time,
                mean_waiting_time=counters.mean_waiting_time,
            )
            for source, counters in zip(self.sources, self.stats.sources)
        ]
        devices = [
            DeviceSummary(
                name=device.name,
                served=counters.served,
                busy_time=counters.busy_time,
                utilization=counters.utilization(elapsed),
            )
            for device, counters in zip(self.devices, self.stats.devices)
        ]
        packet = self.marker.source_id
        discipline = DisciplineSnapshot(
            packet_source=None if packet is None else self.sources[packet].name,
            buffer_size=self.buffer.size(),
            buffer_capacity=self.buffer.capacity,
            buffer_peak=self.buffer.peak_size,
        )

        return SimulationSummary(
            elapsed_time=elapsed,
            stop_reason=self._stop_reason.value,
            generated=self.stats.generated,
            served=self.stats.served,
            rejected=self.stats.rejected,
            pending=sum(pending),
            events_processed=self._events_processed,
            sources=sources,
            devices=devices,
            discipline=discipline,
        )
