"""Bearer token issuing and validation.

After the GitHub OAuth exchange we issue our own HS256 token. It carries the
GitHub identity and the (encrypted) GitHub access token so that every later
request can call the GitHub API on the user's behalf without server-side
session storage.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from codeinsight.config import settings
from codeinsight.core.encryption import token_encryption

ALGORITHM = "HS256"


@dataclass(frozen=True)
class AuthContext:
    """Authenticated identity resolved from a bearer token.

    Passed explicitly into handlers and services instead of being attached
    to the request.
    """

    github_id: int
    login: str
    access_token: str


def create_access_token(
    github_id: int,
    login: str,
    github_token: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a bearer token for a GitHub user."""
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(days=settings.auth_token_expire_days))
    claims: dict[str, Any] = {
        "sub": str(github_id),
        "login": login,
        "gh": token_encryption.encrypt(github_token),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(claims, settings.auth_secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> AuthContext:
    """Validate a bearer token and return the identity it carries.

    Raises:
        ValueError: If the token is invalid, expired, or missing claims.
    """
    try:
        payload = jwt.decode(token, settings.auth_secret, algorithms=[ALGORITHM])
    except JWTError as e:
        raise ValueError(f"Invalid token: {e}") from e

    sub = payload.get("sub")
    login = payload.get("login")
    sealed = payload.get("gh")
    if not sub or not login or not sealed:
        raise ValueError("Token is missing required claims")

    return AuthContext(
        github_id=int(sub),
        login=login,
        access_token=token_encryption.decrypt(sealed),
    )
