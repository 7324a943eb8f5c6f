"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class UpstreamError(AppError):
    """Raised when an upstream platform fails or returns an unusable payload."""

    def __init__(self, message="Upstream service error."):
        """Initialize the error."""
        super().__init__(message, 502)


class ConfigurationError(AppError):
    """Raised when a required setting (e.g. an API credential) is missing."""

    def __init__(self, message="Application is not configured."):
        """Initialize the error."""
        super().__init__(message, 500)
