"""Core simulation primitives: clock, events and the event calendar."""

from prioritysim.core.clock import Clock
from prioritysim.core.event import Event, EventKind
from prioritysim.core.event_calendar import EventCalendar

__all__ = [
    "Clock",
    "Event",
    "EventCalendar",
    "EventKind",
]
