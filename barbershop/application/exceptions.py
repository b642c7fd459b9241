from __future__ import annotations

from datetime import date


class ValidationError(ValueError):
    """Raised when caller input can be corrected and retried. Nothing is committed."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class IncompleteBookingError(ValidationError):
    """Raised when confirming a booking before every stage is complete."""

    def __init__(self, message: str = "Booking details are incomplete.") -> None:
        super().__init__("IncompleteBooking", message)


class SlotConflictError(RuntimeError):
    """Raised when the (barber, date, time) slot already holds an appointment."""

    def __init__(self, barber_name: str, day: date, time: str) -> None:
        super().__init__(f"{barber_name} is already booked on {day.isoformat()} at {time}.")
        self.barber_name = barber_name
        self.date = day
        self.time = time


class CorruptStateError(RuntimeError):
    """Raised when persisted ledger state cannot be loaded as-is."""
    pass


class GenerationError(RuntimeError):
    """Raised when the AI provider returns an empty or malformed response."""
    pass


class UpstreamServiceError(RuntimeError):
    """Raised when an external provider fails (timeouts, network errors, service unavailable)."""
    pass


class AuthenticationError(RuntimeError):
    """Raised when credentials do not match any account."""
    pass
