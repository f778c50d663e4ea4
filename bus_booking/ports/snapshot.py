"""Snapshot port - Persistence of the whole booking state.

The booking service never talks to storage directly; a snapshot
repository restores the state at startup and saves it at shutdown (or
after every mutation when autosave is enabled).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..services.state import BookingState


class SnapshotRepositoryPort(Protocol):
    """Port for loading and saving booking state.

    Implementations:
    - adapters/snapshot/json_snapshot.py (JsonSnapshotRepository)
    """

    def load(self) -> Optional[BookingState]:
        """Load the persisted state.

        Returns:
            The restored state, or None if nothing was persisted yet.

        Raises:
            StorageError: If persisted data exists but cannot be read.
        """
        ...

    def save(self, state: BookingState) -> None:
        """Persist the state, replacing any previous snapshot.

        Raises:
            StorageError: If the state cannot be written.
        """
        ...
