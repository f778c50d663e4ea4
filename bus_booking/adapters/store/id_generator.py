"""Shared monotonic identifier counter.

Every entity kind draws its ids from the same counter, so an admin, a
route and a passenger never share an id. The counter only moves forward,
except when a rolled-back operation hands its ids back; restoring a
snapshot seeds it with the last issued value.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field


@dataclass
class SequentialIdGenerator:
    """Thread-safe counter issuing 1, 2, 3, ...

    This generator implements the IdGeneratorPort protocol.

    Attributes:
        start: Last value considered issued; the first ``next_id`` returns
            ``start + 1``.
    """

    start: int = 0

    _value: int = field(init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Counter start must be non-negative, got {self.start}")
        self._value = self.start
        self._logger = logging.getLogger(__name__)

    @property
    def current(self) -> int:
        """Return the last issued identifier (0 if none was issued)."""
        with self._lock:
            return self._value

    def next_id(self) -> int:
        """Increment the counter and return the new value."""
        with self._lock:
            self._value += 1
            issued = self._value
        self._logger.debug("Issued id", extra={"entity_id": issued})
        return issued

    def rewind(self, value: int) -> None:
        """Move the counter back to ``value``, handing out those ids again.

        Only ids issued by a write that was rolled back may be reclaimed.

        Raises:
            ValueError: If ``value`` is negative or ahead of the counter.
        """
        with self._lock:
            if not 0 <= value <= self._value:
                raise ValueError(
                    f"Cannot rewind counter from {self._value} to {value}"
                )
            self._value = value
        self._logger.debug("Counter rewound", extra={"id_counter": value})
