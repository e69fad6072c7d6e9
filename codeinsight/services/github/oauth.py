"""
GitHub OAuth web flow.

Builds the authorize redirect, exchanges the callback code for an access
token, and fetches the signed-in user's profile with a short fixed-delay
retry (a freshly issued token is occasionally rejected for a moment).
"""

import asyncio
import logging
from urllib.parse import urlencode

import httpx

from codeinsight.config import settings
from codeinsight.services.github.constants import (
    GITHUB_ACCESS_TOKEN_URL,
    GITHUB_AUTHORIZE_URL,
    OAUTH_USER_FETCH_ATTEMPTS,
    OAUTH_USER_FETCH_DELAY_SECONDS,
)
from codeinsight.services.github.exceptions import GitHubAPIError
from codeinsight.services.github.helpers import handle_error_response
from codeinsight.services.github.http_client import get_github_client
from codeinsight.services.github.read_operations import GitHubReadOperations
from codeinsight.services.github.types import GitHubUser

logger = logging.getLogger(__name__)


def build_authorize_url() -> str:
    """URL that starts the OAuth flow; GitHub sends the user back to the frontend."""
    params = {
        "client_id": settings.github_client_id,
        "scope": settings.github_oauth_scope,
        "redirect_uri": f"{settings.frontend_url}/auth/callback",
    }
    return f"{GITHUB_AUTHORIZE_URL}?{urlencode(params)}"


async def exchange_code(code: str) -> str | None:
    """
    Exchange an OAuth callback code for a user access token.

    Returns:
        The access token, or None when GitHub did not issue one (bad or
        expired code). GitHub reports those as 200 with an "error" field.

    Raises:
        GitHubAPIError: If the token endpoint itself fails.
    """
    client = get_github_client()
    response = await client.post(
        GITHUB_ACCESS_TOKEN_URL,
        data={
            "client_id": settings.github_client_id,
            "client_secret": settings.github_client_secret,
            "code": code,
        },
        headers={"Accept": "application/json"},
    )
    handle_error_response(response, "OAuth access token")

    payload = response.json()
    token = payload.get("access_token")
    if not token:
        logger.warning(f"OAuth code exchange returned no token: {payload.get('error')}")
        return None
    return str(token)


async def fetch_user_with_retry(
    access_token: str,
    attempts: int = OAUTH_USER_FETCH_ATTEMPTS,
    delay: float = OAUTH_USER_FETCH_DELAY_SECONDS,
) -> GitHubUser:
    """
    Fetch the authenticated user, retrying with a fixed delay.

    Raises:
        GitHubAPIError: If every attempt fails with an API error.
        httpx.HTTPError: If every attempt fails and the last was a network error.
    """
    github = GitHubReadOperations(access_token)
    last_error: Exception | None = None

    for attempt in range(attempts):
        try:
            return await github.get_authenticated_user()
        except (GitHubAPIError, httpx.HTTPError) as e:
            last_error = e
            if attempt < attempts - 1:
                logger.warning(
                    f"GitHub user fetch failed (attempt {attempt + 1}/{attempts}), "
                    f"retrying in {delay}s: {e}"
                )
                await asyncio.sleep(delay)
            else:
                logger.error(f"GitHub user fetch failed after {attempts} attempts: {e}")

    raise last_error or GitHubAPIError("GitHub user fetch failed")
