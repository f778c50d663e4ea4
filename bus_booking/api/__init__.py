"""API layer - Transport-neutral entry point for remote callers.

Available components:
- BookingDispatcher: Decodes payloads and returns tagged results
- Payload schemas: Pydantic models for each operation payload
"""

from ..domain.validation import parse_admin_id
from .dispatcher import OPERATIONS, BookingDispatcher

__all__ = ["BookingDispatcher", "OPERATIONS", "parse_admin_id"]
