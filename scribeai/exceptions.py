"""Error taxonomy shared by routers and services."""


class ScribeError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ScribeError):
    """Raised for user-correctable input problems."""

    status_code = 400


class NotFoundError(ScribeError):
    """Raised when a referenced resource (e.g. an expired upload) is gone."""

    status_code = 404


class UpstreamServiceError(ScribeError):
    """Raised when an OCR or summarization provider call fails."""


class ConfigurationError(UpstreamServiceError):
    """Raised when a required credential or setting is missing."""


class UnexpectedError(ScribeError):
    """Catch-all; the message is generic and details stay in the logs."""


class AuthenticationError(ScribeError):
    """Raised when submitted credentials do not grant a session."""

    status_code = 401
