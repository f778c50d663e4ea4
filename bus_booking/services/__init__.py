"""Services layer - Application orchestration.

Available services:
- BookingService: The domain operations (creations, bookings, votes)
- BookingState: The entity collections and id counter they act on
"""

from .booking_service import BookingService
from .state import BookingState

__all__ = ["BookingService", "BookingState"]
