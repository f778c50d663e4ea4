"""Clock port - Source of creation timestamps."""

from __future__ import annotations

from typing import Protocol


class ClockPort(Protocol):
    """Port for reading the current time.

    Implementations:
    - adapters/clock.py (SystemClock) - Production
    - adapters/clock.py (FixedClock) - Testing
    """

    def now_ns(self) -> int:
        """Return the current time in nanoseconds since the Unix epoch."""
        ...
