"""Tests for mapping GitHub failures onto HTTP errors."""

import time

from codeinsight.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from codeinsight.services.github.exceptions import GitHubAPIError


class TestUpstreamErrorFromGithub:
    def test_unauthorized_stays_401(self):
        error = UpstreamError.from_github(GitHubAPIError("Invalid or expired GitHub token", 401))

        assert error.status_code == 401
        assert error.detail == "Invalid or expired GitHub token"

    def test_not_found_is_bad_gateway(self):
        error = UpstreamError.from_github(GitHubAPIError("Repository or resource not found: x", 404))

        assert error.status_code == 502

    def test_rate_limit_mentions_reset(self):
        reset = int(time.time()) + 30 * 60 + 20

        error = UpstreamError.from_github(
            GitHubAPIError("GitHub API rate limit exceeded", 403, rate_limit_reset=reset)
        )

        assert error.status_code == 502
        assert error.detail.startswith("GitHub API rate limit exceeded. Rate limit resets in")
        assert error.detail.endswith("minutes.")
        assert "30 minutes" in error.detail or "29 minutes" in error.detail

    def test_reset_in_the_past_is_zero(self):
        error = UpstreamError.from_github(
            GitHubAPIError("GitHub API rate limit exceeded", 403, rate_limit_reset=1)
        )

        assert "resets in 0 minutes" in error.detail


class TestHttpErrors:
    def test_not_found(self):
        assert NotFoundError("User").detail == "User not found"
        assert NotFoundError("User").status_code == 404

    def test_authentication(self):
        error = AuthenticationError()

        assert error.status_code == 401
        assert error.headers == {"WWW-Authenticate": "Bearer"}

    def test_validation(self):
        assert ValidationError("bad").status_code == 400
