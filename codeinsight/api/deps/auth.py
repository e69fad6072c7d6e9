import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from codeinsight.core.database import get_db
from codeinsight.core.exceptions import AuthenticationError, NotFoundError
from codeinsight.core.security import AuthContext, decode_access_token
from codeinsight.domain.user_operations import user_ops
from codeinsight.models.user import User
from codeinsight.services.github import GitHubReadOperations

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_auth_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthContext:
    """Resolve the bearer token into the caller's GitHub identity."""
    if credentials is None:
        raise AuthenticationError("No token provided")

    try:
        return decode_access_token(credentials.credentials)
    except ValueError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise AuthenticationError("Invalid token") from None


DbSession = Annotated[AsyncSession, Depends(get_db)]
Auth = Annotated[AuthContext, Depends(get_auth_context)]


async def get_current_user(auth: Auth, db: DbSession) -> User:
    """Stored user for the caller. 404 until the profile has been synced."""
    user = await user_ops.get_by_github_id(db, auth.github_id)
    if user is None:
        raise NotFoundError("User")
    return user


def get_github(auth: Auth) -> GitHubReadOperations:
    """GitHub client acting with the caller's access token."""
    return GitHubReadOperations(auth.access_token)


CurrentUser = Annotated[User, Depends(get_current_user)]
GitHub = Annotated[GitHubReadOperations, Depends(get_github)]
