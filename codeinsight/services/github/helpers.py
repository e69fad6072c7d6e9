"""
GitHub API helper utilities.

Provides rate limit handling, error response processing and timestamp
parsing shared by the REST and OAuth clients.
"""

import logging
from datetime import datetime

import httpx

from codeinsight.services.github.exceptions import GitHubAPIError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Raise for any non-2xx response from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        resource: What was being fetched, for error context (e.g. "owner/repo")

    Raises:
        GitHubAPIError: For authentication, authorization, rate limit,
            not-found or any other non-success status
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Repository or resource not found: {resource}", 404)
    elif response.status_code == 403:
        if rate_info.is_exhausted:
            logger.warning(f"GitHub rate limit exhausted while fetching {resource}")
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                403,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError("GitHub API forbidden", 403)
    raise GitHubAPIError(
        f"GitHub API error: {response.status_code}", response.status_code
    )


def parse_github_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp from GitHub ("2024-01-02T03:04:05Z")."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
