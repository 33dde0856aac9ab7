"""Error taxonomy for booking operations."""


class BookingError(Exception):
    """Base class for recoverable booking failures."""


class ValidationError(BookingError):
    """A required field is empty or an input is out of range."""


class TimeConflictError(BookingError):
    """The requested interval overlaps another appointment of the same stylist and day."""


class PastTimeError(BookingError):
    """The requested start time has already elapsed."""


class NotFoundError(BookingError):
    """The referenced stylist or appointment does not exist."""


class PersistenceError(BookingError):
    """The underlying storage failed; the cause is chained."""
