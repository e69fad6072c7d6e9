"""
TTL caching for GitHub API responses.

Only the single-repository detail view is cached. Repository sync always goes
to GitHub so that a re-sync reflects the current state.

Cache durations:
- Trees: 5 minutes (change with commits)
- Repo details: 10 minutes (stars/forks change occasionally)
- Contributors, branches, releases: 1 hour (rarely change)
"""

import hashlib
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from cachetools import TTLCache  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

tree_cache: TTLCache[str, Any] = TTLCache(maxsize=100, ttl=300)
repo_details_cache: TTLCache[str, Any] = TTLCache(maxsize=200, ttl=600)
contributors_cache: TTLCache[str, Any] = TTLCache(maxsize=200, ttl=3600)
branches_cache: TTLCache[str, Any] = TTLCache(maxsize=200, ttl=3600)
releases_cache: TTLCache[str, Any] = TTLCache(maxsize=200, ttl=3600)

_ALL_CACHES: dict[str, TTLCache[str, Any]] = {
    "tree": tree_cache,
    "repo_details": repo_details_cache,
    "contributors": contributors_cache,
    "branches": branches_cache,
    "releases": releases_cache,
}


def _make_cache_key(func_name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """
    Generate a cache key from function name and arguments.

    Skips 'self' (first positional arg) since we're caching by repo identity, not instance.
    """
    cache_args = args[1:] if args else ()
    key_data = f"{func_name}:{cache_args}:{sorted(kwargs.items())}"
    return hashlib.md5(key_data.encode()).hexdigest()


def cached_github_call(
    cache: TTLCache[str, Any],
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for caching async GitHub API calls.

    Usage:
        @cached_github_call(tree_cache)
        async def get_repo_tree(self, full_name: str, branch: str) -> RepoTree:
            ...

    Exceptions are not cached; a failed call is retried on the next request.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            key = _make_cache_key(func.__name__, args, kwargs)

            if key in cache:
                logger.debug(f"Cache HIT: {func.__name__}")
                cached_result: T = cache[key]
                return cached_result

            logger.debug(f"Cache MISS: {func.__name__}")
            result = await func(*args, **kwargs)
            cache[key] = result
            return result

        return wrapper

    return decorator


def clear_all_caches() -> None:
    """Clear all GitHub caches. Useful for testing or when data is known to be stale."""
    for cache in _ALL_CACHES.values():
        cache.clear()
    logger.debug("Cleared all GitHub caches")


def get_cache_stats() -> dict[str, dict[str, int]]:
    """Get current cache statistics for monitoring."""
    return {
        name: {"size": len(cache), "maxsize": cache.maxsize}
        for name, cache in _ALL_CACHES.items()
    }
