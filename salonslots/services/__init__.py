"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking import BookingService, SalonDataClientProtocol

__all__ = ["BookingService", "SalonDataClientProtocol"]
