"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the booking core and the adapters that
store its state. They enable dependency injection and make the system
testable with isolated in-memory state.
"""

from .clock import ClockPort
from .snapshot import SnapshotRepositoryPort
from .store import EntityStorePort, IdGeneratorPort

__all__ = [
    # Store
    "EntityStorePort",
    "IdGeneratorPort",
    # Clock
    "ClockPort",
    # Persistence
    "SnapshotRepositoryPort",
]
