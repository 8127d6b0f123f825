"""Simulation actors: requests, sources, devices and the admission buffer."""

from prioritysim.entities.buffer import AdmissionBuffer, PacketMarker
from prioritysim.entities.device import Device
from prioritysim.entities.device_selector import RoundRobinSelector
from prioritysim.entities.request import Request
from prioritysim.entities.source import Source

__all__ = [
    "AdmissionBuffer",
    "Device",
    "PacketMarker",
    "Request",
    "RoundRobinSelector",
    "Source",
]
