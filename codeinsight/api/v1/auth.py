"""
GitHub OAuth sign-in.

The browser is sent to GitHub from GET /auth/github (served outside the
/api/v1 prefix). GitHub redirects back to the frontend, which posts the code
here to receive a bearer token for the rest of the API.
"""

import logging
from datetime import datetime

import httpx
from fastapi import APIRouter, HTTPException, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from codeinsight.api.deps import Auth
from codeinsight.config import settings
from codeinsight.core.exceptions import UpstreamError, ValidationError
from codeinsight.core.security import create_access_token
from codeinsight.services.github import GitHubAPIError, GitHubUser
from codeinsight.services.github.oauth import (
    build_authorize_url,
    exchange_code,
    fetch_user_with_retry,
)

router = APIRouter(prefix="/auth", tags=["auth"])
login_router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


class OAuthCallbackRequest(BaseModel):
    """Code GitHub handed to the frontend callback page."""

    code: str | None = None


class SignedInUser(BaseModel):
    github_id: int
    login: str
    name: str | None
    email: str | None
    avatar_url: str | None
    bio: str | None
    location: str | None
    company: str | None
    public_repos: int
    followers: int
    following: int
    created_at: datetime | None

    @classmethod
    def from_github(cls, user: GitHubUser) -> "SignedInUser":
        return cls(
            github_id=user.github_id,
            login=user.login,
            name=user.name,
            email=user.email,
            avatar_url=user.avatar_url,
            bio=user.bio,
            location=user.location,
            company=user.company,
            public_repos=user.public_repos,
            followers=user.followers,
            following=user.following,
            created_at=user.created_at,
        )


class OAuthCallbackResponse(BaseModel):
    success: bool = True
    token: str
    user: SignedInUser


class Identity(BaseModel):
    github_id: int
    login: str


class VerifyResponse(BaseModel):
    success: bool = True
    valid: bool = True
    user: Identity


@login_router.get("/auth/github", include_in_schema=False)
async def github_login() -> RedirectResponse:
    """Start the OAuth flow."""
    if not settings.github_oauth_enabled:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="OAuth configuration error",
        )
    return RedirectResponse(build_authorize_url(), status_code=status.HTTP_302_FOUND)


@router.post("/github/callback", response_model=OAuthCallbackResponse)
async def github_callback(data: OAuthCallbackRequest) -> OAuthCallbackResponse:
    """Exchange an OAuth code for a bearer token."""
    if not data.code:
        raise ValidationError("Authorization code is required")

    if not settings.github_oauth_enabled:
        logger.error("GitHub OAuth client id/secret are not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="OAuth configuration error",
        )

    try:
        access_token = await exchange_code(data.code)
        if access_token is None:
            raise ValidationError("Failed to get access token")
        github_user = await fetch_user_with_retry(access_token)
    except GitHubAPIError as e:
        logger.error(f"OAuth callback failed: {e.message} (status {e.status_code})")
        raise UpstreamError.from_github(e) from None
    except httpx.HTTPError as e:
        logger.error(f"OAuth callback could not reach GitHub: {e!r}")
        raise UpstreamError("Failed to reach GitHub") from None

    token = create_access_token(github_user.github_id, github_user.login, access_token)
    logger.info(f"Issued bearer token for {github_user.login}")

    return OAuthCallbackResponse(token=token, user=SignedInUser.from_github(github_user))


@router.get("/verify", response_model=VerifyResponse)
async def verify(auth: Auth) -> VerifyResponse:
    """Echo the identity carried by the bearer token."""
    return VerifyResponse(user=Identity(github_id=auth.github_id, login=auth.login))
