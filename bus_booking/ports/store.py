"""Store ports - Abstractions for entity collections and id issuance.

These protocols define the contracts between the booking service and the
storage backing each entity kind. Every kind lives in its own keyed
collection; all kinds share one identifier counter.
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, Tuple, TypeVar

T = TypeVar("T")


class EntityStorePort(Protocol[T]):
    """Port for one keyed entity collection.

    Implementations:
    - adapters/store/memory_store.py (InMemoryEntityStore)

    There is no range query and no secondary index: uniqueness checks scan
    the full collection. ``remove`` exists only to undo an uncommitted write.
    """

    def insert(self, entity_id: int, record: T) -> Optional[T]:
        """Insert or overwrite the record stored under ``entity_id``.

        Args:
            entity_id: Key of the record.
            record: The record to store.

        Returns:
            The record previously stored under the key, or None.
        """
        ...

    def get(self, entity_id: int) -> Optional[T]:
        """Look up a record.

        Args:
            entity_id: Key of the record.

        Returns:
            The stored record, or None if the key is absent.
        """
        ...

    def remove(self, entity_id: int) -> Optional[T]:
        """Drop the record stored under ``entity_id`` and return it."""
        ...

    def contains(self, entity_id: int) -> bool:
        """Check whether a record is stored under ``entity_id``."""
        ...

    def scan(self) -> Iterator[Tuple[int, T]]:
        """Iterate over all (id, record) pairs."""
        ...

    def size(self) -> int:
        """Return the number of stored records."""
        ...


class IdGeneratorPort(Protocol):
    """Port for the shared monotonic identifier counter.

    Implementations:
    - adapters/store/id_generator.py (SequentialIdGenerator)
    """

    @property
    def current(self) -> int:
        """Return the last issued identifier (0 if none was issued)."""
        ...

    def next_id(self) -> int:
        """Increment the counter and return the new value."""
        ...

    def rewind(self, value: int) -> None:
        """Reset the counter to ``value`` after a rolled-back operation."""
        ...
