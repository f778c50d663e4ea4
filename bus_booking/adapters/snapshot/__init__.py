"""Snapshot adapters - Implementations of the SnapshotRepositoryPort.

Available implementations:
- JsonSnapshotRepository: Whole-state JSON file with atomic replace
"""

from .json_snapshot import JsonSnapshotRepository

__all__ = ["JsonSnapshotRepository"]
