"""Domain errors raised by services and rendered by the API's exception handlers."""

from fastapi import status


class PortfolioError(Exception):
    """Base class for errors that map onto an HTTP status and error code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, str]:
        error = {"code": self.code, "message": self.message}
        if self.field:
            error["field"] = self.field
        return error


class Unauthorized(PortfolioError):
    """Missing, invalid or expired session credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class NotFound(PortfolioError):
    """No owning user, profile or project."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ValidationFailed(PortfolioError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class Conflict(PortfolioError):
    """Duplicate user email."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "CONFLICT"
