"""Domain error codes for the cinema module.

Every error belongs to one of four kinds:

- ValidationError: malformed input, never retried.
- NotFoundError: reference to something that does not exist.
- ConflictError: the request clashes with committed state.
- UnavailableError: the backing store failed; the only retryable kind.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ID = "INVALID_ID"
    INVALID_SHOWROOM = "INVALID_SHOWROOM"
    INVALID_LAYOUT = "INVALID_LAYOUT"
    LAYOUT_ALREADY_DEFINED = "LAYOUT_ALREADY_DEFINED"
    INVALID_INTERVAL = "INVALID_INTERVAL"
    INVALID_PRICE = "INVALID_PRICE"
    INVALID_PREMIUM = "INVALID_PREMIUM"
    MOVIE_NOT_FOUND = "MOVIE_NOT_FOUND"
    SHOWROOM_NOT_FOUND = "SHOWROOM_NOT_FOUND"
    LAYOUT_NOT_FOUND = "LAYOUT_NOT_FOUND"
    SEAT_NOT_FOUND = "SEAT_NOT_FOUND"
    SHOW_NOT_FOUND = "SHOW_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    SHOW_OVERLAP = "SHOW_OVERLAP"
    SEAT_ALREADY_BOOKED = "SEAT_ALREADY_BOOKED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Input is malformed. Always the caller's fault."""


class NotFoundError(DomainError):
    """A referenced record does not exist."""


class ConflictError(DomainError):
    """The request clashes with already committed state."""


class UnavailableError(DomainError):
    """The backing store could not be reached. Safe to retry with backoff."""


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, kind: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {kind} ID format",
        )
        self.kind = kind


class InvalidShowroomError(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SHOWROOM, message=reason)


class InvalidLayoutError(ValidationError):
    """Raised when a seat layout definition is rejected."""

    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_LAYOUT, message=reason)


class LayoutAlreadyDefinedError(ValidationError):
    """Raised when a showroom already has its seat layout."""

    def __init__(self, showroom_id: str) -> None:
        super().__init__(
            code=ErrorCode.LAYOUT_ALREADY_DEFINED,
            message="Seat layout is already defined for this showroom",
        )
        self.showroom_id = showroom_id


class InvalidIntervalError(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_INTERVAL, message=reason)


class InvalidPriceError(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_PRICE, message=reason)


class InvalidPremiumError(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_PREMIUM, message=reason)


class MovieNotFoundError(NotFoundError):
    """Raised when the catalog does not know a movie."""

    def __init__(self, movie_id: str) -> None:
        super().__init__(code=ErrorCode.MOVIE_NOT_FOUND, message="Movie not found")
        self.movie_id = movie_id


class ShowroomNotFoundError(NotFoundError):
    """Raised when a showroom is not found."""

    def __init__(self, showroom_id: str) -> None:
        super().__init__(
            code=ErrorCode.SHOWROOM_NOT_FOUND,
            message="Showroom not found",
        )
        self.showroom_id = showroom_id


class LayoutNotFoundError(NotFoundError):
    """Raised when a showroom has no seat layout yet."""

    def __init__(self, showroom_id: str) -> None:
        super().__init__(
            code=ErrorCode.LAYOUT_NOT_FOUND,
            message="Seat layout not found for showroom",
        )
        self.showroom_id = showroom_id


class SeatNotFoundError(NotFoundError):
    """Raised when a seat label is not part of a showroom's layout."""

    def __init__(self, seat_label: str) -> None:
        super().__init__(
            code=ErrorCode.SEAT_NOT_FOUND,
            message=f"Seat {seat_label} not found in layout",
        )
        self.seat_label = seat_label


class ShowNotFoundError(NotFoundError):
    """Raised when a show is not found."""

    def __init__(self, show_id: str) -> None:
        super().__init__(code=ErrorCode.SHOW_NOT_FOUND, message="Show not found")
        self.show_id = show_id


class BookingNotFoundError(NotFoundError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class ShowOverlapError(ConflictError):
    """Raised when a show would overlap another show in the same showroom."""

    def __init__(self, conflicting_show_id: str | None) -> None:
        super().__init__(
            code=ErrorCode.SHOW_OVERLAP,
            message="Showroom is already occupied during this interval",
        )
        self.conflicting_show_id = conflicting_show_id


class SeatAlreadyBookedError(ConflictError):
    """Raised when a seat is already booked for a show."""

    def __init__(self, show_id: str, seat_label: str) -> None:
        super().__init__(
            code=ErrorCode.SEAT_ALREADY_BOOKED,
            message=f"Seat {seat_label} already booked",
        )
        self.show_id = show_id
        self.seat_label = seat_label


class StoreUnavailableError(UnavailableError):
    """Raised when the persistence backend fails."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Storage is temporarily unavailable",
        )
        self.operation = operation
