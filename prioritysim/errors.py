"""Exceptions raised by the simulator.

Absence (no free device, an empty buffer, an empty calendar) is reported with
``None`` and handled as a branch. Only broken internal invariants raise.
"""


class InvariantViolation(RuntimeError):
    """A simulation invariant was broken.

    Raised for programming defects such as a device holding two requests or a
    buffer growing past its capacity. Statistics gathered after such a defect
    cannot be trusted, so the run is aborted instead of continued.
    """
