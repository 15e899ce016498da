"""
Exception taxonomy for the calendar service.

Messages on these exceptions may reach API callers, so they never carry
paths, sheet contents or upstream error text.
"""

DATA_ACCESS_MESSAGE = "Unable to access data. Please check configuration and try again."
OPERATION_FAILED_MESSAGE = (
    "Unable to load calendar data. Please try again later "
    "or contact support if the issue persists."
)


class CalendarServiceError(Exception):
    """Base class for all service errors."""


class ConfigurationError(CalendarServiceError):
    """Required configuration is missing or a table is not available."""


class ValidationError(CalendarServiceError):
    """A table name or input value failed validation."""


class DataAccessError(CalendarServiceError):
    """Reading from the underlying data source failed."""

    def __init__(self, message: str = DATA_ACCESS_MESSAGE):
        super().__init__(message)


class OperationFailedError(CalendarServiceError):
    """Catch-all raised by the request entry point."""

    def __init__(self, message: str = OPERATION_FAILED_MESSAGE):
        super().__init__(message)
