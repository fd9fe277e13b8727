"""Custom exception classes for the application.

Services raise these; the handlers in anihub.core.handlers turn them into
``{"success": false, "message": ...}`` responses with the matching status.
"""


class AniHubException(Exception):
    """Base exception for all AniHub errors."""

    status_code: int = 500

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class ValidationError(AniHubException):
    """Raised when input is malformed or missing."""

    status_code = 400


class UnauthorizedError(AniHubException):
    """Raised when a request lacks valid credentials."""

    status_code = 401


class InvalidCredentialsError(UnauthorizedError):
    """Raised on a failed login. Never says which half was wrong."""

    def __init__(self):
        super().__init__("Invalid email or password")


class ForbiddenError(AniHubException):
    """Raised when the caller does not own the target resource."""

    status_code = 403


class NotFoundError(AniHubException):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: object = None):
        if identifier is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} with identifier '{identifier}' not found")


class ConflictError(AniHubException):
    """Raised when a uniqueness rule would be violated."""

    status_code = 409


class CatalogUnavailableError(AniHubException):
    """Raised when the third-party anime catalog cannot be reached."""

    status_code = 502

    def __init__(self, message: str = "Anime catalog is unavailable"):
        super().__init__(message)
