class TicketClientError(Exception):
    """Base class for failures surfaced by the ticket client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(TicketClientError):
    """A local precondition failed before any request was sent."""


class NetworkError(TicketClientError):
    """The API could not be reached or returned an unreadable body."""


class HttpError(TicketClientError):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, message: str, code: str | None = None) -> None:
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class NotFoundError(HttpError):
    """The API reported that the requested ticket does not exist."""
