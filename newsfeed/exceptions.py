"""Custom exception classes for the newsfeed client."""


class NewsfeedError(Exception):
    """Base exception for newsfeed errors."""
    pass


class TransportError(NewsfeedError):
    """Raised when a request fails before a usable response is obtained."""
    pass


class HttpError(NewsfeedError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f'HttpError(code={self.code}, message={self.message!r})'


class FormatError(NewsfeedError, ValueError):
    """Raised when a payload does not decode into the expected model."""
    pass


class ExhaustedRetriesError(NewsfeedError):
    """Raised when a retry loop ends without a result or an error to report."""
    pass


class ConfigurationError(NewsfeedError):
    """Raised when configuration values are unusable."""
    pass


class ValidationError(NewsfeedError):
    """Raised when input validation fails."""
    pass
