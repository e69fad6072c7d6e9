import time
from typing import TYPE_CHECKING

from fastapi import HTTPException, status

if TYPE_CHECKING:
    from codeinsight.services.github.exceptions import GitHubAPIError


class NotFoundError(HTTPException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )


class AuthenticationError(HTTPException):
    """Raised when the bearer credential is missing or invalid."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ValidationError(HTTPException):
    """Raised when request validation fails."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )


class UpstreamError(HTTPException):
    """Raised when a single-call operation against GitHub fails."""

    def __init__(self, message: str, status_code: int = status.HTTP_502_BAD_GATEWAY):
        super().__init__(
            status_code=status_code,
            detail=message,
        )

    @classmethod
    def from_github(cls, error: "GitHubAPIError") -> "UpstreamError":
        """GitHub 401 stays 401 (the stored token is no longer valid); anything else is 502."""
        if error.status_code == status.HTTP_401_UNAUTHORIZED:
            return cls(error.message, status_code=status.HTTP_401_UNAUTHORIZED)

        detail = error.message
        if error.rate_limit_reset:
            reset_in = max(0, error.rate_limit_reset - int(time.time()))
            detail = f"{error.message}. Rate limit resets in {reset_in // 60} minutes."
        return cls(detail)
