"""Clock adapters.

SystemClock reads wall-clock time. FixedClock returns a preset value and
optionally advances by a fixed step on every read, which keeps
``created_at`` values predictable in tests.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass
class SystemClock:
    """Wall-clock time in nanoseconds since the Unix epoch."""

    def now_ns(self) -> int:
        return time.time_ns()


@dataclass
class FixedClock:
    """Deterministic clock for testing.

    Attributes:
        start_ns: Value returned by the first read
        step_ns: Amount added after every read (0 = frozen clock)
    """

    start_ns: int = 0
    step_ns: int = 0

    _next: int = field(init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        self._next = self.start_ns

    def now_ns(self) -> int:
        with self._lock:
            value = self._next
            self._next += self.step_ns
            return value
