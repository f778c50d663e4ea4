"""Thread-safe in-memory entity collection.

One instance backs each entity kind. Records are keyed by their shared
identifier and kept in a plain dict guarded by an RLock; ``scan`` returns
a snapshot ordered by id so callers can iterate while other threads write.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass
class InMemoryEntityStore(Generic[T]):
    """Keyed collection of records for one entity kind.

    This store implements the EntityStorePort protocol.

    Attributes:
        name: Collection name for logging (e.g. 'routes')

    Example:
        routes = InMemoryEntityStore[Route](name="routes")
        routes.insert(route.id, route)
        assert routes.contains(route.id)
    """

    name: str = "store"

    _records: Dict[int, T] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"store.{self.name}")

    def insert(self, entity_id: int, record: T) -> Optional[T]:
        """Insert or overwrite a record.

        Args:
            entity_id: Key of the record.
            record: The record to store.

        Returns:
            The record previously stored under the key, or None.
        """
        with self._lock:
            previous = self._records.get(entity_id)
            self._records[entity_id] = record

        if previous is None:
            self._logger.debug("Inserted record", extra={"entity_id": entity_id})
        else:
            self._logger.debug("Replaced record", extra={"entity_id": entity_id})
        return previous

    def remove(self, entity_id: int) -> Optional[T]:
        """Drop a record, returning it (None if the key was absent).

        Only used to undo a write whose commit failed.
        """
        with self._lock:
            removed = self._records.pop(entity_id, None)
        if removed is not None:
            self._logger.debug("Removed record", extra={"entity_id": entity_id})
        return removed

    def get(self, entity_id: int) -> Optional[T]:
        with self._lock:
            return self._records.get(entity_id)

    def contains(self, entity_id: int) -> bool:
        with self._lock:
            return entity_id in self._records

    def scan(self) -> Iterator[Tuple[int, T]]:
        """Iterate over all (id, record) pairs in id order.

        The iteration runs over a copy taken under the lock.
        """
        with self._lock:
            items: List[Tuple[int, T]] = sorted(self._records.items(), key=lambda kv: kv[0])
        return iter(items)

    def values(self) -> List[T]:
        """Return all records in id order."""
        return [record for _, record in self.scan()]

    def size(self) -> int:
        with self._lock:
            return len(self._records)

    def clear(self) -> int:
        """Remove every record.

        Returns:
            Number of records that were removed.
        """
        with self._lock:
            count = len(self._records)
            self._records.clear()
        self._logger.info("Store cleared", extra={"records_cleared": count})
        return count

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, entity_id: object) -> bool:
        return isinstance(entity_id, int) and self.contains(entity_id)
