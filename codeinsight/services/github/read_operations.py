"""
GitHub API read operations.

Provides the read-only calls used by profile sync, repository sync and the
single-repository detail view:
- Authenticated user profile
- Owned repository listing
- Language byte counts and commits
- Repository details, contributors, branches, releases and file tree
"""

import logging
from typing import Any

from codeinsight.services.github.cache import (
    branches_cache,
    cached_github_call,
    contributors_cache,
    releases_cache,
    repo_details_cache,
    tree_cache,
)
from codeinsight.services.github.constants import (
    DEFAULT_BRANCH,
    GITHUB_API_URL,
    GITHUB_API_VERSION,
    REPOS_PER_PAGE,
)
from codeinsight.services.github.helpers import handle_error_response, parse_github_datetime
from codeinsight.services.github.http_client import get_github_client
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

logger = logging.getLogger(__name__)


def normalize_user(data: dict[str, Any]) -> GitHubUser:
    """Convert a GitHub /user response to GitHubUser."""
    return GitHubUser(
        github_id=data["id"],
        login=data["login"],
        name=data.get("name"),
        email=data.get("email"),
        avatar_url=data.get("avatar_url"),
        bio=data.get("bio"),
        location=data.get("location"),
        company=data.get("company"),
        blog=data.get("blog"),
        public_repos=data.get("public_repos") or 0,
        followers=data.get("followers") or 0,
        following=data.get("following") or 0,
        created_at=parse_github_datetime(data.get("created_at")),
    )


def normalize_repo(data: dict[str, Any]) -> GitHubRepo:
    """Convert a GitHub repository payload to GitHubRepo."""
    owner = data.get("owner") or {}
    return GitHubRepo(
        github_id=data["id"],
        name=data["name"],
        full_name=data["full_name"],
        owner_login=owner.get("login", ""),
        description=data.get("description"),
        language=data.get("language"),
        size=data.get("size") or 0,
        stargazers_count=data.get("stargazers_count") or 0,
        forks_count=data.get("forks_count") or 0,
        is_fork=bool(data.get("fork", False)),
        is_private=bool(data.get("private", False)),
        default_branch=data.get("default_branch"),
        topics=list(data.get("topics") or []),
        created_at=parse_github_datetime(data.get("created_at")),
        updated_at=parse_github_datetime(data.get("updated_at")),
        pushed_at=parse_github_datetime(data.get("pushed_at")),
        watchers_count=data.get("watchers_count") or 0,
        open_issues_count=data.get("open_issues_count") or 0,
        has_wiki=bool(data.get("has_wiki", False)),
        has_pages=bool(data.get("has_pages", False)),
    )


def normalize_commit(data: dict[str, Any]) -> GitHubCommit:
    """Convert a commits-listing entry to GitHubCommit."""
    commit = data.get("commit") or {}
    author = commit.get("author") or {}
    date = parse_github_datetime(author.get("date"))
    if date is None:
        raise ValueError(f"Commit {data.get('sha')} has no author date")
    return GitHubCommit(
        sha=data["sha"],
        message=commit.get("message") or "",
        author_name=author.get("name"),
        author_email=author.get("email"),
        date=date,
        html_url=data.get("html_url"),
    )


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    One instance per access token. Uses the shared HTTP client singleton for
    connection pooling; the token travels in per-request headers.
    """

    def __init__(self, token: str):
        self.token = token
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    async def _get(
        self,
        path: str,
        resource: str,
        params: dict[str, str | int] | None = None,
        timeout: float | None = None,
    ) -> Any:
        client = get_github_client()
        kwargs: dict[str, Any] = {"headers": self._headers, "params": params}
        if timeout is not None:
            kwargs["timeout"] = timeout
        response = await client.get(f"{GITHUB_API_URL}{path}", **kwargs)
        handle_error_response(response, resource)
        return response.json()

    async def get_authenticated_user(self) -> GitHubUser:
        """Fetch the profile of the token's owner."""
        data = await self._get("/user", "user", timeout=10.0)
        return normalize_user(data)

    async def list_owned_repos(self) -> list[GitHubRepo]:
        """
        Fetch the first page of repositories owned by the authenticated user.

        Returned in GitHub's order, most recently updated first. Forks are
        included; filtering is the caller's job.
        """
        params: dict[str, str | int] = {
            "sort": "updated",
            "per_page": REPOS_PER_PAGE,
            "type": "owner",
        }
        data: list[dict[str, Any]] = await self._get("/user/repos", "user repositories", params)
        return [normalize_repo(repo) for repo in data]

    async def get_repo_languages(self, full_name: str) -> dict[str, int]:
        """Fetch language name to byte count for a repository."""
        data: dict[str, int] = await self._get(
            f"/repos/{full_name}/languages", full_name, timeout=15.0
        )
        return data

    async def get_repo_commits(
        self,
        full_name: str,
        author: str,
        per_page: int,
    ) -> list[GitHubCommit]:
        """
        Fetch the most recent commits by an author, newest first.

        Entries without a sha or author date are logged and dropped.
        """
        params: dict[str, str | int] = {"per_page": per_page, "author": author}
        data: list[dict[str, Any]] = await self._get(
            f"/repos/{full_name}/commits", full_name, params
        )
        commits: list[GitHubCommit] = []
        for entry in data:
            try:
                commits.append(normalize_commit(entry))
            except (KeyError, ValueError) as e:
                logger.warning(f"Dropping malformed commit in {full_name}: {e!r}")
        return commits

    @cached_github_call(repo_details_cache)
    async def get_repo_details(self, full_name: str) -> GitHubRepo:
        """
        Fetch detailed information for a specific repository.

        Results are cached for 10 minutes.
        """
        data = await self._get(f"/repos/{full_name}", full_name)
        return normalize_repo(data)

    @cached_github_call(contributors_cache)
    async def get_repo_contributors(self, full_name: str, limit: int = 10) -> list[ContributorInfo]:
        """Fetch top contributors for a repository, most contributions first."""
        client = get_github_client()
        response = await client.get(
            f"{GITHUB_API_URL}/repos/{full_name}/contributors",
            headers=self._headers,
            params={"per_page": limit, "anon": "false"},
            timeout=15.0,
        )

        # Empty repositories answer 204 with no body
        if response.status_code == 204:
            return []

        handle_error_response(response, full_name)

        data: list[dict[str, Any]] = response.json()
        return [
            ContributorInfo(
                login=contrib["login"],
                avatar_url=contrib.get("avatar_url"),
                contributions=contrib.get("contributions", 0),
                html_url=contrib.get("html_url"),
            )
            for contrib in data[:limit]
        ]

    @cached_github_call(branches_cache)
    async def get_repo_branches(self, full_name: str, limit: int = 10) -> list[BranchInfo]:
        """Fetch branches for a repository."""
        data: list[dict[str, Any]] = await self._get(
            f"/repos/{full_name}/branches", full_name, {"per_page": limit}
        )
        return [
            BranchInfo(
                name=branch["name"],
                protected=bool(branch.get("protected", False)),
                commit_sha=(branch.get("commit") or {}).get("sha"),
            )
            for branch in data[:limit]
        ]

    @cached_github_call(releases_cache)
    async def get_repo_releases(self, full_name: str, limit: int = 5) -> list[ReleaseInfo]:
        """Fetch the most recent releases for a repository."""
        data: list[dict[str, Any]] = await self._get(
            f"/repos/{full_name}/releases", full_name, {"per_page": limit}
        )
        return [
            ReleaseInfo(
                tag_name=release["tag_name"],
                name=release.get("name"),
                published_at=parse_github_datetime(release.get("published_at")),
                prerelease=bool(release.get("prerelease", False)),
                html_url=release.get("html_url"),
            )
            for release in data[:limit]
        ]

    @cached_github_call(tree_cache)
    async def get_repo_tree(self, full_name: str, branch: str = DEFAULT_BRANCH) -> RepoTree:
        """
        Fetch the complete file tree for a repository.

        Uses the Git Trees API with recursive=1 to get all files in a single
        call. Results are cached for 5 minutes.
        """
        data = await self._get(
            f"/repos/{full_name}/git/trees/{branch}", full_name, {"recursive": "1"}
        )

        items = [
            RepoTreeItem(
                path=item["path"],
                type=item["type"],
                size=item.get("size"),
                sha=item["sha"],
            )
            for item in data.get("tree", [])
        ]
        if data.get("truncated"):
            logger.info(f"Tree for {full_name} was truncated by GitHub ({len(items)} items)")

        return RepoTree(sha=data["sha"], items=items, truncated=data.get("truncated", False))
