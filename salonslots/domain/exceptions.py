"""
Domain-specific exception hierarchy for the salonslots application.
"""


class SalonSlotsError(Exception):
    """Base class for all application-level errors."""


class DataAccessError(SalonSlotsError):
    """Raised when salon data cannot be fetched, stored or parsed."""


class BookingConflictError(SalonSlotsError):
    """Raised when a requested start time is not bookable."""


class ServiceNotFoundError(SalonSlotsError):
    """Raised when a service id does not belong to the salon."""
