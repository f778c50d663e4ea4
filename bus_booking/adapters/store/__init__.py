"""Store adapters - Implementations of the store ports.

Available implementations:
- InMemoryEntityStore: Thread-safe keyed collection for one entity kind
- SequentialIdGenerator: Shared monotonic identifier counter
"""

from .id_generator import SequentialIdGenerator
from .memory_store import InMemoryEntityStore

__all__ = ["InMemoryEntityStore", "SequentialIdGenerator"]
