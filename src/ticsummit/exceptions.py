"""Exceptions raised by the TIC Summit client."""


class TicSummitError(Exception):
    """Base class for every error raised by this package."""


class FetchFailure(TicSummitError):
    """A request to the site API failed or returned ``success: false``."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} ({self.url})"
        return self.message


class DraftValidationError(TicSummitError):
    """A draft record is missing a required field or holds an invalid value."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
