from codeinsight.api.v1 import ai, auth, dashboard, github

__all__ = [
    "auth",
    "github",
    "ai",
    "dashboard",
]
