class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ClockRejected(DomainError):
    """An expected, user-facing rejection of a clock action.

    ``code`` is stable and safe to hand to the presentation layer as-is.
    """

    code = "clock_rejected"
    default_message = "Clock action rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class AlreadyClockedIn(ClockRejected):
    code = "already_clocked_in"
    default_message = "You have already clocked in today"


class AlreadyClockedOut(ClockRejected):
    code = "already_clocked_out"
    default_message = "You have already clocked out today"


class NoOpenShift(ClockRejected):
    code = "no_open_shift"
    default_message = "You have not clocked in today"


class TooEarly(ClockRejected):
    code = "too_early"
    default_message = "Clock-in opens at the start of the shift"


class WindowClosed(ClockRejected):
    code = "window_closed"
    default_message = "The clock-in window for today has closed"


class StorageUnavailable(Exception):
    """The attendance store could not be reached or failed mid-operation.

    Not a DomainError: callers retry these instead of showing them as a
    rejected action.
    """


class AuthorizationError(DomainError):
    """Raised when the caller may not view another employee's attendance."""
