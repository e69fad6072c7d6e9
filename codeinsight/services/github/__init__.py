"""
GitHub service package.

Usage: `from codeinsight.services.github import GitHubReadOperations, GitHubAPIError`

Module structure:
- read_operations.py: REST calls used by sync and the detail view
- oauth.py: OAuth authorize URL, code exchange and user fetch with retry
- helpers.py: Rate limit handling and error utilities
- http_client.py: Shared pooled HTTP client
- cache.py: TTL caches for detail-view calls
- types.py: Normalized response dataclasses
- exceptions.py: Custom exceptions
- constants.py: API URLs and limits
"""

from codeinsight.services.github.cache import clear_all_caches as clear_github_caches
from codeinsight.services.github.cache import get_cache_stats as get_github_cache_stats
from codeinsight.services.github.exceptions import GitHubAPIError
from codeinsight.services.github.helpers import RateLimitInfo, handle_error_response
from codeinsight.services.github.http_client import close_github_client
from codeinsight.services.github.read_operations import GitHubReadOperations
from codeinsight.services.github.types import (
    BranchInfo,
    ContributorInfo,
    GitHubCommit,
    GitHubRepo,
    GitHubUser,
    ReleaseInfo,
    RepoTree,
    RepoTreeItem,
)

__all__ = [
    "GitHubReadOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Cache management
    "clear_github_caches",
    "get_github_cache_stats",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    # Types
    "BranchInfo",
    "ContributorInfo",
    "GitHubCommit",
    "GitHubRepo",
    "GitHubUser",
    "ReleaseInfo",
    "RepoTree",
    "RepoTreeItem",
]
