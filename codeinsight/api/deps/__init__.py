"""API dependencies."""

from .auth import (
    Auth,
    CurrentUser,
    DbSession,
    GitHub,
    get_auth_context,
    get_current_user,
    get_github,
    security,
)

__all__ = [
    "Auth",
    "CurrentUser",
    "DbSession",
    "GitHub",
    "get_auth_context",
    "get_current_user",
    "get_github",
    "security",
]
